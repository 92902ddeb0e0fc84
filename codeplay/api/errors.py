"""Structured API errors.

Handlers raise ``TemplateApiError``; the exception handler installed by
``create_app`` renders it as ``{"error": ..., "code": ...[, "details": ...]}``
with the error's status code.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

MISSING_ID = "MISSING_ID"
PLAYGROUND_NOT_FOUND = "PLAYGROUND_NOT_FOUND"
INVALID_TEMPLATE = "INVALID_TEMPLATE"
INVALID_JSON_STRUCTURE = "INVALID_JSON_STRUCTURE"
TEMPLATE_GENERATION_FAILED = "TEMPLATE_GENERATION_FAILED"


class TemplateApiError(Exception):
    """An error response with a machine-readable code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"{code}: {message}")

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


async def template_api_error_handler(request: Request, exc: TemplateApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())
