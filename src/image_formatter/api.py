"""Public directory-formatting API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from image_formatter.application.ports import ImageCodec
from image_formatter.application.results import RunReport
from image_formatter.application.use_cases import resolve_run_options
from image_formatter.application.use_cases import run_batch


def format_directory(
    source_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    max_width: Optional[int] = None,
    quality: Optional[int] = None,
    formats: Optional[Sequence[str]] = None,
    dry_run: bool = False,
    overwrite: bool = False,
    codec: Optional[ImageCodec] = None,
) -> RunReport:
    """Convert every image in ``source_dir`` into the requested formats."""
    options = resolve_run_options(
        source_dir=source_dir,
        output_dir=output_dir,
        max_width=max_width,
        quality=quality,
        formats=tuple(formats) if formats is not None else None,
        dry_run=dry_run,
        overwrite=overwrite,
    )
    return run_batch(options, codec=codec)
