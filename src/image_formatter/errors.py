"""Error hierarchy for image formatting runs."""

from __future__ import annotations


class ImageFormatterError(Exception):
    """Base error for all image-formatter failures."""

    exit_code = 1


class MissingSourceDirectoryError(ImageFormatterError):
    """Raised when the source image directory does not exist."""


class DependencyError(ImageFormatterError):
    """Raised when a required image library is not installed."""


class CodecError(ImageFormatterError):
    """Base error for codec failures scoped to a single source file."""


class DecodeError(CodecError):
    """Raised when a source file cannot be opened or decoded."""


class MetadataError(CodecError):
    """Raised when image metadata cannot be read."""


class ResizeError(CodecError):
    """Raised when an image cannot be resized."""


class EncodeError(CodecError):
    """Raised when an image cannot be encoded to the requested format."""


class WriteError(CodecError):
    """Raised when encoded output cannot be written to disk."""
