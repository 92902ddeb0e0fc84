"""CodePlay configuration.

Centralised, typed configuration for the web service and CLI. All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from codeplay.templates import DEFAULT_TEMPLATES_ROOT
from codeplay.tree.serializer import ScanOptions


class ServerConfig(BaseModel):
    """Where the HTTP service listens."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")


class CacheConfig(BaseModel):
    """Cache lifetimes advertised on successful template responses.

    Templates change rarely, so shared caches may hold them for an hour and
    keep serving a stale copy for a day while revalidating.
    """

    s_maxage: int = Field(default=3600, ge=0, description="Shared-cache lifetime in seconds")
    stale_while_revalidate: int = Field(
        default=86400, ge=0, description="Seconds a stale response may be served while revalidating"
    )

    @property
    def header_value(self) -> str:
        return (
            f"public, s-maxage={self.s_maxage}, "
            f"stale-while-revalidate={self.stale_while_revalidate}"
        )


class Config(BaseModel):
    """Global CodePlay configuration.

    Instances are typically created once by ``create_app`` or by the CLI
    entry point and then passed through the rest of the system.
    """

    templates_root: Path = Field(default=DEFAULT_TEMPLATES_ROOT)
    output_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "codeplay-output",
        description="Scratch directory for per-request template JSON files",
    )
    data_file: Path | None = Field(
        default=None, description="JSON file backing the playground store; in-memory when unset"
    )
    server: ServerConfig = Field(default_factory=ServerConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    scan: ScanOptions = Field(default_factory=ScanOptions)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def cache_control_header(self) -> str:
        """Value of the ``Cache-Control`` header on template responses."""
        return self.cache.header_value

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: File written by :meth:`save`.

        Returns:
            A validated ``Config``.

        Raises:
            OSError: If the file cannot be read.
            pydantic.ValidationError: If the JSON is malformed or invalid.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CODEPLAY_TEMPLATES_ROOT, CODEPLAY_OUTPUT_DIR, CODEPLAY_DATA_FILE,
            CODEPLAY_HOST, CODEPLAY_PORT, CODEPLAY_LOG_LEVEL,
            CODEPLAY_CACHE_S_MAXAGE, CODEPLAY_CACHE_SWR,
            CODEPLAY_MAX_FILE_SIZE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CODEPLAY_TEMPLATES_ROOT"):
            kwargs["templates_root"] = Path(os.environ["CODEPLAY_TEMPLATES_ROOT"])
        if os.environ.get("CODEPLAY_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CODEPLAY_OUTPUT_DIR"])
        if os.environ.get("CODEPLAY_DATA_FILE"):
            kwargs["data_file"] = Path(os.environ["CODEPLAY_DATA_FILE"])

        server_kwargs: dict[str, Any] = {}
        if os.environ.get("CODEPLAY_HOST"):
            server_kwargs["host"] = os.environ["CODEPLAY_HOST"]
        if os.environ.get("CODEPLAY_PORT"):
            server_kwargs["port"] = int(os.environ["CODEPLAY_PORT"])
        if os.environ.get("CODEPLAY_LOG_LEVEL"):
            server_kwargs["log_level"] = os.environ["CODEPLAY_LOG_LEVEL"]

        cache_kwargs: dict[str, Any] = {}
        if os.environ.get("CODEPLAY_CACHE_S_MAXAGE"):
            cache_kwargs["s_maxage"] = int(os.environ["CODEPLAY_CACHE_S_MAXAGE"])
        if os.environ.get("CODEPLAY_CACHE_SWR"):
            cache_kwargs["stale_while_revalidate"] = int(os.environ["CODEPLAY_CACHE_SWR"])

        scan_kwargs: dict[str, Any] = {}
        if os.environ.get("CODEPLAY_MAX_FILE_SIZE"):
            scan_kwargs["max_file_size"] = int(os.environ["CODEPLAY_MAX_FILE_SIZE"])

        return cls(
            **kwargs,
            server=ServerConfig(**server_kwargs),
            cache=CacheConfig(**cache_kwargs),
            scan=ScanOptions(**scan_kwargs),
        )

    def ensure_directories(self) -> None:
        """Create the directories that must exist before serving requests."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if self.data_file is not None:
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
