"""``GET /api/template/{id}``: a playground's starter files as a JSON tree.

Request flow:

1. Reject a missing or blank id (400 ``MISSING_ID``).
2. Look up the playground (404 ``PLAYGROUND_NOT_FOUND``).
3. Resolve its template directory (404 ``INVALID_TEMPLATE``).
4. Scan the directory into a uniquely named temporary JSON file.
5. Read the file back as a tree.
6. Check the tree's items survive JSON round-tripping (500 ``INVALID_JSON_STRUCTURE``).
7. Respond 200 with cache headers.

The temporary file is removed on every exit path.  Anything unexpected in
steps 2-6 becomes 500 ``TEMPLATE_GENERATION_FAILED`` with the error message
in ``details``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from codeplay.config import Config
from codeplay.playgrounds import PlaygroundStore
from codeplay.templates import resolve_template_path
from codeplay.tree import (
    TemplateFolder,
    is_json_serializable,
    read_template_structure_from_json,
    save_template_structure_to_json,
)
from codeplay.utils import temporary_output_file

from .deps import get_config, get_store
from .errors import (
    INVALID_JSON_STRUCTURE,
    INVALID_TEMPLATE,
    MISSING_ID,
    PLAYGROUND_NOT_FOUND,
    TEMPLATE_GENERATION_FAILED,
    TemplateApiError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/template", tags=["template"])


async def generate_template_json(
    playground_id: str | None,
    config: Config,
    store: PlaygroundStore,
) -> TemplateFolder:
    """Run steps 1-6 and return the tree, or raise ``TemplateApiError``."""
    if not playground_id or not playground_id.strip():
        raise TemplateApiError(400, MISSING_ID, "Missing playground ID")

    try:
        playground = await store.get_playground(playground_id.strip())
        if playground is None:
            raise TemplateApiError(404, PLAYGROUND_NOT_FOUND, "Playground not found")

        template_key = getattr(playground.template, "value", playground.template)
        input_path = resolve_template_path(template_key, config.templates_root)
        if input_path is None:
            raise TemplateApiError(404, INVALID_TEMPLATE, "Invalid template type")

        with temporary_output_file(config.output_dir, template_key) as output_file:
            logger.info(
                "Processing template %s from %s into %s", template_key, input_path, output_file
            )
            await save_template_structure_to_json(input_path, output_file, config.scan)
            result = await read_template_structure_from_json(output_file)

            if not is_json_serializable(result.to_wire()["items"]):
                raise TemplateApiError(
                    500, INVALID_JSON_STRUCTURE, "Generated template has invalid structure"
                )
            return result
    except TemplateApiError:
        raise
    except Exception as exc:
        logger.exception("Error generating template JSON for playground %s", playground_id)
        raise TemplateApiError(
            500,
            TEMPLATE_GENERATION_FAILED,
            "Failed to generate template structure",
            details=str(exc) or type(exc).__name__,
        ) from exc


@router.get("")
@router.get("/")
async def get_template_without_id() -> JSONResponse:
    raise TemplateApiError(400, MISSING_ID, "Missing playground ID")


@router.get("/{playground_id}")
async def get_template(
    playground_id: str,
    config: Config = Depends(get_config),
    store: PlaygroundStore = Depends(get_store),
) -> JSONResponse:
    result = await generate_template_json(playground_id, config, store)
    return JSONResponse(
        status_code=200,
        content={"success": True, "templateJson": result.to_wire()},
        headers={"Cache-Control": config.cache_control_header},
        media_type="application/json",
    )
