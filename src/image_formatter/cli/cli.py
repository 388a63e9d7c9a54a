#!/usr/bin/env python3
"""
image_formatter.cli.cli

Typer-based CLI for batch-converting a directory of images into web formats.

Option parsing is deliberately forgiving: malformed numeric values or an
empty format list fall back to defaults, and unrecognized arguments are
ignored.

Examples
--------
Convert ``./images`` into ``./images/formatted`` as WebP + JPEG:

    format-images

Preview a PNG-only run capped at 1200px without writing anything:

    format-images --dry-run --max-width=1200 --formats=png
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from typer.core import TyperCommand

from image_formatter.application.options import (
    DEFAULT_FORMATS,
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    RunOptions,
)
from image_formatter.application.results import ConversionResult, RunReport
from image_formatter.errors import ImageFormatterError

app = typer.Typer(
    name="format-images",
    help="Convert a directory of images into web-optimized formats.",
    add_completion=False,
)

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "image_formatter"
LOG_HANDLER_NAME = "image_formatter.cli.stderr"
STATUS_WIDTH = 13


# -----------------------------
# Output / logging utilities
# -----------------------------
@contextmanager
def _stderr_logging(verbose: bool) -> Iterator[None]:
    """Route package log records to stderr as bare messages for one run.

    Parameters
    ----------
    verbose : bool
        Whether DEBUG records (ignored options, tracebacks) are shown.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for stale in list(package_logger.handlers):
        if stale.get_name() == LOG_HANDLER_NAME:
            package_logger.removeHandler(stale)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOG_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    try:
        yield
    finally:
        handler.flush()
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


def _print_run_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly run error.

    Parameters
    ----------
    exc : Exception
        Exception that escaped the batch run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", err=True, fg=typer.colors.RED)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def format_result_line(result: ConversionResult) -> str:
    """Render one conversion result as a fixed-width report line."""
    return (
        f"{result.status:<{STATUS_WIDTH}} "
        f"{result.source_name} -> {result.output_name} [{result.format}]"
    )


def _render_header(report: RunReport, options: RunOptions) -> None:
    """Print the discovery line before any file is converted."""
    if not report.discovered:
        typer.echo("No images found to process.")
        return

    typer.echo(
        f"Found {len(report.discovered)} image(s). "
        f"Output -> {report.output_dir.resolve()}"
    )
    if options.dry_run:
        typer.echo("(dry-run) No files will be written")


def _render_summary(report: RunReport) -> None:
    if not report.discovered:
        return
    for result in report.results:
        typer.echo(format_result_line(result))
    typer.echo(
        f"Done. written={report.written}, skipped={report.skipped}, dry={report.dry}"
    )


# -----------------------------
# Argument parsing
# -----------------------------
class ForgivingCommand(TyperCommand):
    """Command that sets malformed option spellings aside instead of failing.

    Click rejects ``--dry-run=true`` and a value option with no value. Such
    tokens are moved to ``ctx.args`` before parsing, so they are ignored like
    any other unrecognized argument:

    - a flag spelled with ``=value``;
    - a value option at the end of the line or followed by another option.
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        kept, ignored = self._split_malformed(ctx, args)
        remaining = super().parse_args(ctx, kept)
        ctx.args = [*ignored, *remaining]
        return ctx.args

    def _split_malformed(
        self, ctx: typer.Context, args: list[str]
    ) -> tuple[list[str], list[str]]:
        flags: set[str] = set()
        valued: set[str] = set()
        for param in self.get_params(ctx):
            if param.param_type_name != "option":
                continue
            names = [*param.opts, *param.secondary_opts]
            if param.is_flag or param.count:
                flags.update(names)
            else:
                valued.update(names)

        kept: list[str] = []
        ignored: list[str] = []
        index = 0
        while index < len(args):
            arg = args[index]
            if arg == "--":
                kept.extend(args[index:])
                break
            name, has_value, _ = arg.partition("=")
            if has_value and name in flags:
                ignored.append(arg)
            elif arg in valued:
                following = args[index + 1] if index + 1 < len(args) else None
                if following is None or following.startswith("-"):
                    ignored.append(arg)
                else:
                    kept.extend((arg, following))
                    index += 1
            else:
                kept.append(arg)
            index += 1
        return kept, ignored


# -----------------------------
# Command
# -----------------------------
@app.command(
    cls=ForgivingCommand,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def format_images_cmd(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Report outputs without writing any file."
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace output files that already exist."
    ),
    max_width: str | None = typer.Option(
        None,
        "--max-width",
        help=f"Downsize images wider than N pixels (default {DEFAULT_MAX_WIDTH}).",
    ),
    quality: str | None = typer.Option(
        None,
        "--quality",
        help=f"Encoder quality 1-100 (default {DEFAULT_QUALITY}).",
    ),
    formats: str | None = typer.Option(
        None,
        "--formats",
        help=(
            "Comma-separated output formats: webp, jpeg/jpg, png "
            f"(default {','.join(DEFAULT_FORMATS)})."
        ),
    ),
    source_dir: Path | None = typer.Option(
        None, "--source-dir", help="Directory of source images (default ./images)."
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Destination directory (default <source-dir>/formatted).",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log ignored options and error tracebacks."
    ),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Convert every image in the source directory into the requested formats.

    Parameters
    ----------
    ctx : typer.Context
        Typer context; unrecognized arguments are collected in ``ctx.args``.
    max_width : str | None
        Raw width override; invalid or non-positive values keep the default.
    quality : str | None
        Raw quality override; invalid or out-of-range values keep the default.
    formats : str | None
        Raw comma-separated format list; an empty list keeps the default.

    Notes
    -----
    - Per-file failures are reported on stderr and do not change the exit code.
    - A missing source directory exits with status 1 before any work.
    """
    with _stderr_logging(verbose):
        if ctx.args:
            logger.debug("Ignoring unrecognized arguments: %s", " ".join(ctx.args))

        try:
            from image_formatter.application.use_cases import (
                resolve_run_options,
                run_batch,
            )

            options = resolve_run_options(
                max_width=max_width,
                quality=quality,
                formats=formats,
                dry_run=dry_run,
                overwrite=overwrite,
                source_dir=source_dir,
                output_dir=output_dir,
            )
            report = run_batch(
                options,
                on_discovered=lambda found: _render_header(found, options),
            )
        except ImageFormatterError as exc:
            raise typer.Exit(code=_print_run_error(exc, debug))
        except Exception as exc:
            # Unexpected crash: still show a clean message; debug prints traceback.
            raise typer.Exit(code=_print_run_error(exc, debug))

    _render_summary(report)


if __name__ == "__main__":
    app()
