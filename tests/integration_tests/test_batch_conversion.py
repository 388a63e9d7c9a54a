"""Integration tests running batches through the Pillow codec."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from image_formatter import format_directory


@pytest.fixture
def images(tmp_path: Path) -> Path:
    """Source directory with an 800px PNG and a 2000px JPEG."""
    directory = tmp_path / "images"
    directory.mkdir()
    Image.new("RGBA", (800, 600), (20, 40, 60, 255)).save(directory / "a.png")
    Image.new("RGB", (2000, 1000), (200, 100, 50)).save(directory / "b.jpg")
    return directory


def _size(path: Path) -> tuple[int, int]:
    with Image.open(path) as image:
        return image.size


def test_scenario_writes_four_outputs(images: Path) -> None:
    """Convert both sources to webp+jpg, downsizing only the wide one."""
    report = format_directory(images)

    out = images / "formatted"
    assert [(r.status, r.output_name, r.format) for r in report.results] == [
        ("written", "a.webp", "webp"),
        ("written", "a.jpg", "jpeg"),
        ("written", "b.webp", "webp"),
        ("written", "b.jpg", "jpeg"),
    ]
    assert (report.written, report.skipped, report.dry) == (4, 0, 0)
    assert _size(out / "a.webp") == (800, 600)
    assert _size(out / "a.jpg") == (800, 600)
    assert _size(out / "b.webp") == (1600, 800)
    assert _size(out / "b.jpg") == (1600, 800)


def test_second_run_is_idempotent(images: Path) -> None:
    """Skip every output written by the first run."""
    format_directory(images, formats=["webp", "png"])
    before = {p.name: p.stat().st_mtime_ns for p in (images / "formatted").iterdir()}

    report = format_directory(images, formats=["webp", "png"])

    assert [r.status for r in report.results] == ["skipped-exists"] * 4
    after = {p.name: p.stat().st_mtime_ns for p in (images / "formatted").iterdir()}
    assert after == before


def test_dry_run_creates_no_files(images: Path) -> None:
    """Report dry-run results while the output directory stays empty."""
    report = format_directory(images, dry_run=True, formats=["webp", "jpeg", "png"])

    assert report.dry == 6
    assert list((images / "formatted").iterdir()) == []


def test_downsizing_preserves_aspect_ratio(tmp_path: Path) -> None:
    """Bound width and keep the height proportional."""
    directory = tmp_path / "images"
    directory.mkdir()
    Image.new("RGB", (1234, 777), "blue").save(directory / "odd.tiff")

    format_directory(directory, max_width=500, formats=["png"])

    width, height = _size(directory / "formatted" / "odd.png")
    assert width == 500
    assert abs(height - 777 * 500 / 1234) <= 1


def test_corrupt_file_does_not_stop_the_batch(images: Path) -> None:
    """Record the corrupt file as a failure and convert the rest."""
    (images / "broken.gif").write_bytes(b"not an image at all")

    report = format_directory(images, formats=["webp"])

    assert [f.source_name for f in report.failures] == ["broken.gif"]
    assert [r.output_name for r in report.results] == ["a.webp", "b.webp"]
    assert not (images / "formatted" / "broken.webp").exists()


def test_custom_output_directory(images: Path, tmp_path: Path) -> None:
    """Write into an explicit output directory, creating it on demand."""
    target = tmp_path / "public" / "img"

    report = format_directory(images, target, formats=["jpg"])

    assert report.output_dir == target
    assert sorted(p.name for p in target.iterdir()) == ["a.jpg", "b.jpg"]
    assert not (images / "formatted").exists()
