"""Source image discovery for a flat directory."""

from __future__ import annotations

import os
from pathlib import Path

SUPPORTED_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".webp", ".tif", ".tiff", ".gif"}
)


def is_image_file(name: str) -> bool:
    """Return whether ``name`` carries a supported image extension."""
    return Path(name).suffix.lower() in SUPPORTED_EXTENSIONS


def discover_images(source_dir: Path) -> list[Path]:
    """List candidate image files directly inside ``source_dir``.

    Parameters
    ----------
    source_dir : Path
        Directory to scan.

    Returns
    -------
    list[Path]
        Candidate files sorted by name; empty when nothing matches.

    Notes
    -----
    - Subdirectories, including the output directory, are never entered.
    """
    files: list[Path] = []
    with os.scandir(source_dir) as entries:
        for entry in entries:
            if entry.is_dir():
                continue
            if entry.is_file() and is_image_file(entry.name):
                files.append(Path(entry.path))
    return sorted(files, key=lambda path: path.name)
