"""Application use-cases orchestrating batch image formatting."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import ExitStack, closing
from pathlib import Path

from pydantic import ValidationError

from image_formatter.adapters.codec import PillowImageCodec
from image_formatter.application.options import (
    DEFAULT_SOURCE_DIR,
    OUTPUT_SUBDIR,
    RunOptions,
)
from image_formatter.application.ports import ImageCodec
from image_formatter.application.results import (
    ConversionResult,
    FileFailure,
    RunReport,
)
from image_formatter.discovery import discover_images
from image_formatter.errors import MissingSourceDirectoryError
from image_formatter.formats import build_output_specs
from image_formatter.schemas import ConverterSettings
from image_formatter.types import ImageMetadata

logger = logging.getLogger(__name__)


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
    """Build typed run options from raw command/API values.

    Each override is validated on its own; an invalid value keeps the
    default for that field and never raises.
    """
    settings = ConverterSettings()
    overrides = {"max_width": max_width, "quality": quality, "formats": formats}
    for name, raw in overrides.items():
        if raw is None:
            continue
        try:
            settings = ConverterSettings.model_validate(
                {**settings.model_dump(), name: raw}
            )
        except ValidationError:
            logger.debug("Ignoring invalid %s value %r; keeping default.", name, raw)

    source = Path(source_dir) if source_dir else DEFAULT_SOURCE_DIR
    output = Path(output_dir) if output_dir else source / OUTPUT_SUBDIR
    return RunOptions(
        source_dir=source,
        output_dir=output,
        max_width=settings.max_width,
        quality=settings.quality,
        formats=settings.formats,
        dry_run=dry_run,
        overwrite=overwrite,
    )


def _should_resize(metadata: ImageMetadata, max_width: int) -> bool:
    width = metadata.width
    return isinstance(width, int) and width > 0 and width > max_width


def iter_image_conversions(
    source: Path,
    options: RunOptions,
    codec: ImageCodec,
) -> Iterator[ConversionResult]:
    """Use-case: derive every requested output of one source image.

    The source is decoded once; each written format encodes its own clone
    of the (possibly resized) working image. Results are yielded in the
    order the formats were requested.
    """
    source_name = source.name
    with ExitStack() as stack:
        handle = stack.enter_context(closing(codec.open(source)))
        handle = stack.enter_context(closing(codec.normalize_orientation(handle)))
        metadata = codec.read_metadata(handle)
        if _should_resize(metadata, options.max_width):
            logger.debug(
                "Resizing %s from width %s to %s",
                source_name,
                metadata.width,
                options.max_width,
            )
            handle = stack.enter_context(
                closing(codec.resize(handle, options.max_width))
            )

        specs = build_output_specs(
            stem=source.stem,
            formats=options.formats,
            output_dir=options.output_dir,
            quality=options.quality,
        )
        for spec in specs:
            output_name = spec.output_path.name
            if not options.overwrite and spec.output_path.exists():
                yield ConversionResult(
                    source_name, output_name, spec.format, "skipped-exists"
                )
                continue
            if options.dry_run:
                yield ConversionResult(source_name, output_name, spec.format, "dry-run")
                continue
            with closing(codec.clone(handle)) as working:
                encoded = codec.encode(working, spec.format, spec.encode_options)
            codec.write(encoded, spec.output_path)
            yield ConversionResult(source_name, output_name, spec.format, "written")


def convert_image(
    source: Path,
    options: RunOptions,
    codec: ImageCodec | None = None,
) -> list[ConversionResult]:
    """Use-case: convert one source image into all requested formats."""
    return list(iter_image_conversions(source, options, codec or PillowImageCodec()))


def run_batch(
    options: RunOptions,
    codec: ImageCodec | None = None,
    *,
    on_discovered: Callable[[RunReport], None] | None = None,
) -> RunReport:
    """Use-case: convert every image in the source directory.

    Parameters
    ----------
    options : RunOptions
        Resolved run configuration.
    codec : ImageCodec | None
        Codec port; defaults to the Pillow adapter.
    on_discovered : Callable[[RunReport], None] | None
        Called once after discovery, before any file is converted, with a
        report holding only the discovered files.

    Raises
    ------
    MissingSourceDirectoryError
        If ``options.source_dir`` does not exist; nothing else is done.
    """
    if not options.source_dir.is_dir():
        raise MissingSourceDirectoryError(
            f"Missing images directory: {options.source_dir.resolve()}"
        )
    options.output_dir.mkdir(parents=True, exist_ok=True)

    files = discover_images(options.source_dir)
    discovered = RunReport(
        source_dir=options.source_dir,
        output_dir=options.output_dir,
        discovered=tuple(files),
    )
    if on_discovered is not None:
        on_discovered(discovered)
    if not files:
        return discovered

    codec = codec or PillowImageCodec()
    results: list[ConversionResult] = []
    failures: list[FileFailure] = []
    for path in files:
        try:
            for result in iter_image_conversions(path, options, codec):
                results.append(result)
        except Exception as exc:
            # One bad file must not abort the batch.
            logger.error("Error processing %s: %s", path.name, exc)
            logger.debug("Traceback for %s", path.name, exc_info=exc)
            failures.append(FileFailure(source_name=path.name, message=str(exc)))

    return RunReport(
        source_dir=options.source_dir,
        output_dir=options.output_dir,
        discovered=tuple(files),
        results=tuple(results),
        failures=tuple(failures),
    )
