"""Pydantic models for config validation.

Call ``Config.validated()`` to obtain a typed ``PhotoJournalConfig``.
Dict-based access through ``Config.get`` keeps working unchanged; the
typed view is what the stores are built from, so env-var strings like
``"false"`` or ``"90"`` are coerced here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    images_dir: Path | None = None
    log_dir: Path | None = None
    preferences_file: Path | None = None

    @field_validator("data_dir", "images_dir", "log_dir", "preferences_file", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    @model_validator(mode="after")
    def _derive_from_data_dir(self) -> PathsConfig:
        if self.images_dir is None:
            self.images_dir = self.data_dir / "images"
        if self.log_dir is None:
            self.log_dir = self.data_dir / "logs"
        if self.preferences_file is None:
            self.preferences_file = self.data_dir / "preferences.json"
        return self


class ImagesConfig(BaseModel):
    """Photo encoding and cleanup settings."""

    jpeg_quality: int = Field(default=80, ge=1, le=100)
    cascade_delete: bool = True


class TagsConfig(BaseModel):
    """Tag parsing settings."""

    keep_empty: bool = False


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: str | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return level


class PhotoJournalConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so unknown sections in a config file are kept
    rather than rejected.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.photojournal"))
    images: ImagesConfig = ImagesConfig()
    tags: TagsConfig = TagsConfig()
    logging: LoggingConfig = LoggingConfig()
