"""Selector settings loaded from environment, ``.env`` and TOML files.

Environment variables use the ``SKILL_SELECTOR_`` prefix with ``__`` as the
nested delimiter, for example ``SKILL_SELECTOR_THRESHOLD=0.2`` or
``SKILL_SELECTOR_LOGGING__LEVEL=DEBUG``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for the ``skill_selector`` logger.

    Attributes:
        level: Log level name.
        format: Format string for the plain formatter.
        structured: Emit one JSON object per record instead of plain text.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format for plain output",
    )
    structured: bool = Field(
        default=False,
        description="Emit JSON lines instead of plain text",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        """Accept lowercase level names."""
        if isinstance(value, str):
            return value.upper()
        return value


class SelectorSettings(BaseSettings):
    """Root configuration for skill selection.

    Attributes:
        skills_dirs: Directories scanned for ``*/SKILL.md`` bundles, in order.
        threshold: Minimum relevance score for a bundle to be matched.
        detail_threshold: Minimum score for a detail document to be suggested.
        max_matches: Cap on the number of matched bundles, ``None`` for no cap.
        auto_load_details: Load suggested detail documents when handling a task.
        logging: Logging configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_SELECTOR_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    skills_dirs: list[Path] = Field(
        default_factory=lambda: [Path(".skills")],
        description="Directories to scan for skill bundles",
    )
    threshold: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Minimum bundle relevance score",
    )
    detail_threshold: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Minimum detail relevance score",
    )
    max_matches: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of matched bundles",
    )
    auto_load_details: bool = Field(
        default=True,
        description="Load suggested details when handling a task",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _expand_user_dirs(self) -> SelectorSettings:
        """Expand ``~`` in every skills directory."""
        self.skills_dirs = [path.expanduser() for path in self.skills_dirs]
        return self

    @classmethod
    def from_toml(cls, path: str | Path) -> SelectorSettings:
        """Load settings from a TOML file.

        Values in the file take precedence over environment variables.

        Args:
            path: Path to the TOML file.

        Returns:
            Validated settings.
        """
        with Path(path).open("rb") as fh:
            data = tomllib.load(fh)
        return cls(**data)
