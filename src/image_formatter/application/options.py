"""Typed option objects shared across formatting use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAX_WIDTH = 1600
DEFAULT_QUALITY = 80
DEFAULT_FORMATS: tuple[str, ...] = ("webp", "jpeg")
DEFAULT_SOURCE_DIR = Path("images")
OUTPUT_SUBDIR = "formatted"


@dataclass(frozen=True)
class RunOptions:
    """Resolved configuration for one batch run."""

    source_dir: Path = DEFAULT_SOURCE_DIR
    output_dir: Path = DEFAULT_SOURCE_DIR / OUTPUT_SUBDIR
    max_width: int = DEFAULT_MAX_WIDTH
    quality: int = DEFAULT_QUALITY
    formats: tuple[str, ...] = DEFAULT_FORMATS
    dry_run: bool = False
    overwrite: bool = False
