"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from image_formatter.application.options import RunOptions
from image_formatter.application.ports import ImageCodec
from image_formatter.application.results import (
    ConversionResult,
    FileFailure,
    RunReport,
)


def resolve_run_options(
    *,
    max_width: str | int | None = None,
    quality: str | int | None = None,
    formats: str | list[str] | tuple[str, ...] | None = None,
    dry_run: bool = False,
    overwrite: bool = False,
    source_dir: str | Path | None = None,
    output_dir: str | Path | None = None,
) -> RunOptions:
    """Build typed run options via lazy use-case import."""
    from image_formatter.application.use_cases import resolve_run_options as _impl

    return _impl(
        max_width=max_width,
        quality=quality,
        formats=formats,
        dry_run=dry_run,
        overwrite=overwrite,
        source_dir=source_dir,
        output_dir=output_dir,
    )


def convert_image(
    source: Path,
    options: RunOptions,
    codec: ImageCodec | None = None,
) -> list[ConversionResult]:
    """Convert one source image via lazy use-case import."""
    from image_formatter.application.use_cases import convert_image as _impl

    return _impl(source, options, codec)


def run_batch(
    options: RunOptions,
    codec: ImageCodec | None = None,
    *,
    on_discovered: Callable[[RunReport], None] | None = None,
) -> RunReport:
    """Convert a source directory via lazy use-case import."""
    from image_formatter.application.use_cases import run_batch as _impl

    return _impl(options, codec, on_discovered=on_discovered)


__all__ = [
    "RunOptions",
    "ConversionResult",
    "FileFailure",
    "RunReport",
    "resolve_run_options",
    "convert_image",
    "run_batch",
]
