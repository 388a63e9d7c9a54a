"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from image_formatter.types import ConversionStatus, OutputFormat


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one (source file, output format) pair."""

    source_name: str
    output_name: str
    format: OutputFormat
    status: ConversionStatus


@dataclass(frozen=True)
class FileFailure:
    """Source file that aborted with an error."""

    source_name: str
    message: str


@dataclass(frozen=True)
class RunReport:
    """Aggregated outcome of a batch run."""

    source_dir: Path
    output_dir: Path
    discovered: tuple[Path, ...] = ()
    results: tuple[ConversionResult, ...] = ()
    failures: tuple[FileFailure, ...] = ()

    def count(self, status: ConversionStatus) -> int:
        """Return how many results carry ``status``."""
        return sum(1 for result in self.results if result.status == status)

    @property
    def written(self) -> int:
        return self.count("written")

    @property
    def skipped(self) -> int:
        return self.count("skipped-exists")

    @property
    def dry(self) -> int:
        return self.count("dry-run")
