"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from image_formatter.types import (
    EncodedImage,
    EncodeOptions,
    ImageHandle,
    ImageMetadata,
    OutputFormat,
)


class ImageCodec(Protocol):
    """Decode, transform and encode images on behalf of the converter."""

    def open(self, path: Path) -> ImageHandle:
        """Decode a source file leniently; raise ``DecodeError`` on failure."""

    def normalize_orientation(self, handle: ImageHandle) -> ImageHandle:
        """Return an upright handle with embedded rotation applied."""

    def read_metadata(self, handle: ImageHandle) -> ImageMetadata:
        """Return dimensions and format facts without modifying the image."""

    def resize(self, handle: ImageHandle, target_width: int) -> ImageHandle:
        """Fit inside ``target_width`` preserving aspect ratio; never enlarge."""

    def clone(self, handle: ImageHandle) -> ImageHandle:
        """Return an independent copy sharing no mutable state."""

    def encode(
        self,
        handle: ImageHandle,
        format: OutputFormat,
        options: EncodeOptions,
    ) -> EncodedImage:
        """Encode pixel data to ``format`` with format-specific options."""

    def write(self, encoded: EncodedImage, path: Path) -> None:
        """Persist encoded bytes; raise ``WriteError`` on filesystem failure."""
