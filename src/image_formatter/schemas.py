"""Pydantic schemas for runtime validation of formatting inputs."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from image_formatter.application.options import (
    DEFAULT_FORMATS,
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
)


class ConverterSettings(BaseModel):
    """Validated numeric and format settings for a batch run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_width: int = Field(default=DEFAULT_MAX_WIDTH, gt=0)
    quality: int = Field(default=DEFAULT_QUALITY, ge=1, le=100)
    formats: tuple[str, ...] = DEFAULT_FORMATS

    @field_validator("formats", mode="before")
    @classmethod
    def _split_formats(cls, value: str | Iterable[str]) -> tuple[str, ...]:
        items = value.split(",") if isinstance(value, str) else list(value)
        tokens = tuple(
            token for token in (str(item).strip().lower() for item in items) if token
        )
        if not tokens:
            raise ValueError("formats must contain at least one token.")
        return tokens
