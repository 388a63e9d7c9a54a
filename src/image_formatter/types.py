"""Shared type aliases and value objects for codec-facing modules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol

type OutputFormat = Literal["webp", "jpeg", "png"]
type ConversionStatus = Literal["written", "skipped-exists", "dry-run"]

type EncodeOptionValue = int | bool
type EncodeOptions = Mapping[str, EncodeOptionValue]


class ImageHandle(Protocol):
    """Opaque decoded image owned by a codec; must be closed after use."""

    def close(self) -> None:
        """Release pixel data and any underlying file handle."""


@dataclass(frozen=True)
class ImageMetadata:
    """Non-destructive facts read from a decoded image."""

    width: int | None
    height: int | None
    format: str | None = None
    mode: str | None = None


@dataclass(frozen=True)
class EncodedImage:
    """Encoded image payload ready to be written to disk."""

    format: OutputFormat
    data: bytes
