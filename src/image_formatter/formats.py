"""Output format rules and per-source output specifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from image_formatter.types import EncodeOptions, OutputFormat

logger = logging.getLogger(__name__)

WEBP_EFFORT = 4


@dataclass(frozen=True)
class FormatRule:
    """How one output format is named and encoded."""

    format: OutputFormat
    extension: str
    build_options: Callable[[int], EncodeOptions]


@dataclass(frozen=True)
class OutputSpec:
    """One output file to derive from a source image."""

    format: OutputFormat
    output_path: Path
    encode_options: EncodeOptions


def _webp_options(quality: int) -> EncodeOptions:
    return {"quality": quality, "effort": WEBP_EFFORT}


def _jpeg_options(quality: int) -> EncodeOptions:
    return {"quality": quality, "optimize": True}


def _png_options(quality: int) -> EncodeOptions:
    # Codec maps quality onto compression effort for lossless PNG.
    return {"quality": quality}


_JPEG_RULE = FormatRule("jpeg", ".jpg", _jpeg_options)

FORMAT_RULES: dict[str, FormatRule] = {
    "webp": FormatRule("webp", ".webp", _webp_options),
    "jpeg": _JPEG_RULE,
    "jpg": _JPEG_RULE,
    "png": FormatRule("png", ".png", _png_options),
}


def resolve_format(token: str) -> FormatRule | None:
    """Return the rule for a format token, or ``None`` when unsupported."""
    return FORMAT_RULES.get(token)


def build_output_specs(
    stem: str,
    formats: Iterable[str],
    output_dir: Path,
    quality: int,
) -> list[OutputSpec]:
    """Build output specs for ``stem`` in the order the formats were requested.

    Unsupported tokens are logged as warnings and produce no spec.
    """
    specs: list[OutputSpec] = []
    for token in formats:
        rule = resolve_format(token)
        if rule is None:
            logger.warning("Skipping unsupported output format: %s", token)
            continue
        specs.append(
            OutputSpec(
                format=rule.format,
                output_path=output_dir / f"{stem}{rule.extension}",
                encode_options=rule.build_options(quality),
            )
        )
    return specs
