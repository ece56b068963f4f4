"""Recognizer configuration.

Options are passed to the recognizer at construction time. ``from_env``
reads overrides from the environment (and a ``.env`` file, if present).
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from stackprobe import __version__

DEFAULT_CACHE_ROOT = str(Path(".stackprobe") / "cache" / "recognizer")
DEFAULT_ARCHITECTURE_FORMAT = "json"

ENV_CACHE_ROOT = "STACKPROBE_CACHE_ROOT"
ENV_ARCHITECTURE_FORMAT = "STACKPROBE_ARCHITECTURE_FORMAT"
ENV_INCLUDE_INACTIVE = "STACKPROBE_INCLUDE_INACTIVE_FILES"


class RecognizerOptions(BaseModel):
    """Options that configure how the recognizer operates."""

    cache_root: str = Field(
        default=DEFAULT_CACHE_ROOT,
        description="Cache directory; relative paths resolve against the project root",
    )
    architecture_format: str = Field(
        default=DEFAULT_ARCHITECTURE_FORMAT, description="Serialization format for cached models"
    )
    recognizer_version: str = Field(default=__version__, description="Version stamped on models")
    include_inactive_files: bool = Field(
        default=True, description="Populate inactiveFiles on every match"
    )

    @field_validator("cache_root", mode="before")
    @classmethod
    def _default_cache_root(cls, value: str | None) -> str | None:
        return value or DEFAULT_CACHE_ROOT

    @field_validator("recognizer_version", mode="before")
    @classmethod
    def _default_version(cls, value: str | None) -> str | None:
        return value or __version__

    @field_validator("architecture_format", mode="before")
    @classmethod
    def _normalize_format(cls, value: str | None) -> str | None:
        return (value or DEFAULT_ARCHITECTURE_FORMAT).lower()

    @classmethod
    def from_env(cls, **overrides: object) -> "RecognizerOptions":
        """Build options from STACKPROBE_* environment variables.

        Explicit keyword overrides win over the environment; ``None``
        overrides are ignored.
        """
        load_dotenv()
        values: dict[str, object] = {}
        if os.getenv(ENV_CACHE_ROOT):
            values["cache_root"] = os.environ[ENV_CACHE_ROOT]
        if os.getenv(ENV_ARCHITECTURE_FORMAT):
            values["architecture_format"] = os.environ[ENV_ARCHITECTURE_FORMAT]
        include = os.getenv(ENV_INCLUDE_INACTIVE)
        if include:
            values["include_inactive_files"] = include.lower() in ("1", "true", "yes")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
