"""Shared test helpers for unit tests: an in-memory image codec."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from image_formatter.application.options import RunOptions
from image_formatter.errors import DecodeError, EncodeError
from image_formatter.types import EncodedImage, ImageMetadata


class FakeHandle:
    """Decoded-image stand-in tracking its size and lifecycle."""

    def __init__(self, name: str, width: int | None, height: int | None) -> None:
        self.name = name
        self.width = width
        self.height = height
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeCodec:
    """In-memory codec recording every call made by the converter."""

    def __init__(
        self,
        sizes: Mapping[str, tuple[int | None, int | None]] | None = None,
        fail_open: set[str] | None = None,
        fail_formats: set[str] | None = None,
    ) -> None:
        self.sizes = dict(sizes or {})
        self.fail_open = fail_open or set()
        self.fail_formats = fail_formats or set()
        self.calls: list[tuple[str, object]] = []
        self.handles: list[FakeHandle] = []

    def _new(self, name: str, width: int | None, height: int | None) -> FakeHandle:
        handle = FakeHandle(name, width, height)
        self.handles.append(handle)
        return handle

    def open(self, path: Path) -> FakeHandle:
        self.calls.append(("open", path.name))
        if path.name in self.fail_open:
            raise DecodeError(f"corrupt data in {path.name}")
        width, height = self.sizes.get(path.name, (800, 600))
        return self._new(path.name, width, height)

    def normalize_orientation(self, handle: FakeHandle) -> FakeHandle:
        self.calls.append(("normalize", handle.name))
        return self._new(handle.name, handle.width, handle.height)

    def read_metadata(self, handle: FakeHandle) -> ImageMetadata:
        self.calls.append(("metadata", handle.name))
        return ImageMetadata(width=handle.width, height=handle.height)

    def resize(self, handle: FakeHandle, target_width: int) -> FakeHandle:
        self.calls.append(("resize", target_width))
        assert handle.width is not None and handle.height is not None
        height = max(1, round(handle.height * target_width / handle.width))
        return self._new(handle.name, target_width, height)

    def clone(self, handle: FakeHandle) -> FakeHandle:
        self.calls.append(("clone", handle.name))
        assert not handle.closed
        return self._new(handle.name, handle.width, handle.height)

    def encode(
        self, handle: FakeHandle, format: str, options: Mapping[str, object]
    ) -> EncodedImage:
        self.calls.append(("encode", format))
        if format in self.fail_formats:
            raise EncodeError(f"{format} encoder exploded")
        payload = f"{format}:{handle.width}x{handle.height}:{options['quality']}"
        return EncodedImage(format=format, data=payload.encode())

    def write(self, encoded: EncodedImage, path: Path) -> None:
        self.calls.append(("write", path.name))
        path.write_bytes(encoded.data)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return an empty source image directory."""
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def make_options(source_dir: Path):
    """Build run options rooted at the temporary source directory."""

    def _make(**overrides: object) -> RunOptions:
        values: dict[str, object] = {
            "source_dir": source_dir,
            "output_dir": source_dir / "formatted",
        }
        values.update(overrides)
        return RunOptions(**values)

    return _make


def touch_images(directory: Path, *names: str) -> list[Path]:
    """Create placeholder source files; the fake codec never reads them."""
    paths = []
    for name in names:
        path = directory / name
        path.write_bytes(b"placeholder")
        paths.append(path)
    return paths


@pytest.fixture
def fake_codec_cls() -> type[FakeCodec]:
    """Expose the fake codec class to test modules."""
    return FakeCodec


@pytest.fixture
def touch():
    """Expose ``touch_images`` to test modules."""
    return touch_images
