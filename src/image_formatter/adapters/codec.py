"""Pillow-backed image codec adapter."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any

from image_formatter.errors import (
    DecodeError,
    DependencyError,
    EncodeError,
    MetadataError,
    ResizeError,
    WriteError,
)
from image_formatter.types import (
    EncodedImage,
    EncodeOptions,
    ImageMetadata,
    OutputFormat,
)

_ALPHA_MODES = frozenset({"RGBA", "LA", "PA", "RGBa", "La"})
_WEBP_MODES = frozenset({"RGB", "RGBA"})
_JPEG_MODES = frozenset({"RGB", "L"})
_DEFAULT_QUALITY = 80
_DEFAULT_WEBP_EFFORT = 4


def _has_alpha(image: Any) -> bool:
    return image.mode in _ALPHA_MODES or (
        image.mode == "P" and "transparency" in image.info
    )


def png_compress_level(quality: int) -> int:
    """Map a 1..100 quality onto zlib compression effort (0..9)."""
    return max(0, min(9, quality * 9 // 100))


class PillowImageCodec:
    """Decode, resize and encode images with Pillow.

    Parameters
    ----------
    lenient : bool, default=True
        Accept truncated or slightly damaged files instead of rejecting them.
    """

    def __init__(self, lenient: bool = True) -> None:
        try:
            from PIL import Image, ImageFile, ImageOps
        except Exception as exc:
            raise DependencyError("Pillow is required for image conversion.") from exc

        self._image = Image
        self._image_file = ImageFile
        self._image_ops = ImageOps
        self.lenient = lenient

    def open(self, path: Path) -> Any:
        """Open and fully decode ``path``.

        Raises
        ------
        DecodeError
            If the file is unreadable or not a recognised image.
        """
        previous = self._image_file.LOAD_TRUNCATED_IMAGES
        self._image_file.LOAD_TRUNCATED_IMAGES = self.lenient
        image = None
        try:
            image = self._image.open(path)
            image.load()
        except (
            OSError,
            EOFError,
            SyntaxError,
            ValueError,
            self._image.DecompressionBombError,
        ) as exc:
            if image is not None:
                image.close()
            raise DecodeError(f"Cannot decode {path.name}: {exc}") from exc
        except Exception:
            if image is not None:
                image.close()
            raise
        finally:
            self._image_file.LOAD_TRUNCATED_IMAGES = previous
        return image

    def normalize_orientation(self, handle: Any) -> Any:
        """Apply EXIF orientation and return an upright copy."""
        try:
            return self._image_ops.exif_transpose(handle)
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Cannot apply orientation: {exc}") from exc

    def read_metadata(self, handle: Any) -> ImageMetadata:
        """Return image dimensions, source format and pixel mode."""
        try:
            width, height = handle.size
        except (AttributeError, TypeError, ValueError) as exc:
            raise MetadataError(f"Cannot read image metadata: {exc}") from exc
        return ImageMetadata(
            width=width,
            height=height,
            format=getattr(handle, "format", None),
            mode=getattr(handle, "mode", None),
        )

    def resize(self, handle: Any, target_width: int) -> Any:
        """Fit the image inside ``target_width`` without enlarging it."""
        if target_width <= 0:
            raise ResizeError(f"Target width must be positive, got {target_width}.")
        width, height = handle.size
        if width <= target_width:
            return handle.copy()
        target_height = max(1, round(height * target_width / width))
        source = handle
        try:
            # Pillow falls back to NEAREST for palette and bilevel images.
            if handle.mode == "P":
                source = handle.convert("RGBA" if _has_alpha(handle) else "RGB")
            elif handle.mode == "1":
                source = handle.convert("L")
            return source.resize(
                (target_width, target_height), self._image.Resampling.LANCZOS
            )
        except (OSError, ValueError, MemoryError) as exc:
            raise ResizeError(f"Cannot resize image: {exc}") from exc
        finally:
            if source is not handle:
                source.close()

    def clone(self, handle: Any) -> Any:
        """Return an independent copy of the decoded pixels."""
        return handle.copy()

    def encode(
        self,
        handle: Any,
        format: OutputFormat,
        options: EncodeOptions,
    ) -> EncodedImage:
        """Encode ``handle`` into ``format`` bytes.

        Notes
        -----
        - ``webp`` honours ``quality`` and ``effort`` (Pillow ``method``).
        - ``jpeg`` honours ``quality``; ``optimize`` also enables progressive
          scans. Transparency is flattened onto white.
        - ``png`` maps ``quality`` onto ``compress_level``.
        """
        quality = int(options.get("quality", _DEFAULT_QUALITY))
        params: dict[str, Any]
        if format == "webp":
            params = {
                "format": "WEBP",
                "quality": quality,
                "method": int(options.get("effort", _DEFAULT_WEBP_EFFORT)),
            }
        elif format == "jpeg":
            params = {"format": "JPEG", "quality": quality}
            if options.get("optimize"):
                params.update(optimize=True, progressive=True)
        elif format == "png":
            params = {"format": "PNG", "compress_level": png_compress_level(quality)}
        else:
            raise EncodeError(f"Unsupported output format: {format}")

        buffer = BytesIO()
        prepared = handle
        try:
            prepared = self._prepare_mode(handle, format)
            prepared.save(buffer, **params)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Cannot encode {format}: {exc}") from exc
        finally:
            if prepared is not handle:
                prepared.close()
        return EncodedImage(format=format, data=buffer.getvalue())

    def write(self, encoded: EncodedImage, path: Path) -> None:
        """Write encoded bytes to ``path``."""
        try:
            path.write_bytes(encoded.data)
        except OSError as exc:
            raise WriteError(f"Cannot write {path}: {exc}") from exc

    def _prepare_mode(self, image: Any, format: OutputFormat) -> Any:
        if format == "jpeg":
            return self._flatten(image)
        if format == "webp" and image.mode not in _WEBP_MODES:
            return image.convert("RGBA" if _has_alpha(image) else "RGB")
        if format == "png" and image.mode == "CMYK":
            return image.convert("RGB")
        return image

    def _flatten(self, image: Any) -> Any:
        if image.mode in _JPEG_MODES:
            return image
        if not _has_alpha(image):
            return image.convert("RGB")
        rgba = image.convert("RGBA")
        background = self._image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        rgba.close()
        return background
