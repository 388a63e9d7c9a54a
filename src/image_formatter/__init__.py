"""Top-level API for batch image formatting."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from image_formatter.application.ports import ImageCodec
    from image_formatter.application.results import RunReport

__version__ = "0.1.0"


def format_directory(
    source_dir: Path | None = None,
    output_dir: Path | None = None,
    *,
    max_width: int | None = None,
    quality: int | None = None,
    formats: Sequence[str] | None = None,
    dry_run: bool = False,
    overwrite: bool = False,
    codec: ImageCodec | None = None,
) -> RunReport:
    """Convert a directory of images into web-ready formats.

    Parameters
    ----------
    source_dir : Path | None, default=None
        Directory holding source images. Defaults to ``./images``.
    output_dir : Path | None, default=None
        Destination directory. Defaults to ``<source_dir>/formatted``.
    max_width : int | None, default=None
        Images wider than this are downsized. Defaults to 1600.
    quality : int | None, default=None
        Encoder quality in 1..100. Defaults to 80.
    formats : Sequence[str] | None, default=None
        Output format tokens (``webp``, ``jpeg``/``jpg``, ``png``).
        Defaults to ``("webp", "jpeg")``.
    dry_run : bool, default=False
        Report outputs without writing anything.
    overwrite : bool, default=False
        Replace outputs that already exist.
    codec : ImageCodec | None, default=None
        Codec implementation; the Pillow adapter when omitted.

    Returns
    -------
    RunReport
        Per-output results and per-file failures in processing order.
    """
    from .api import format_directory as _impl

    return _impl(
        source_dir=source_dir,
        output_dir=output_dir,
        max_width=max_width,
        quality=quality,
        formats=formats,
        dry_run=dry_run,
        overwrite=overwrite,
        codec=codec,
    )


__all__ = ["format_directory"]
