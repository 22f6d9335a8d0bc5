"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking them
  into the CLI.
- Routines and the driver read fixture paths and widths from one place.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import RoutineName


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars, `.env`).
    - A single configuration contract for CLI, driver and routines.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOSING_DEMO_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    greeting_path: Path = Field(
        default=Path("greeting.txt"),
        description="Input fixture read by the greeting and copy routines.",
    )
    missing_path: Path = Field(
        default=Path("does_not_exist.txt"),
        description="Path that must not exist; drives the open-failure routines.",
    )
    copy_path: Path = Field(
        default=Path("greeting_copy.txt"),
        description="Destination written by the copy routines.",
    )
    encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Text encoding used for every fixture.",
    )
    buffer_size: int = Field(
        default=8192,
        ge=1,
        le=1 << 20,
        description="Character buffer size of the buffered reader/writer wrappers.",
    )
    header_width: int = Field(
        default=86,
        ge=1,
        le=1000,
        description="Width of the dashed rule printed around each routine title.",
    )
    enabled_routines: list[RoutineName] = Field(
        default_factory=lambda: [RoutineName.COPY_LINE_BY_LINE_SCOPED],
        description="Routines run by `closing-demo run` when none are given.",
    )
    show_exception_chain: bool = Field(
        default=False,
        description="Render implicitly chained exceptions in failure tracebacks.",
    )
