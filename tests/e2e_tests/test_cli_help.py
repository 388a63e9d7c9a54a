"""End-to-end smoke test for CLI help output."""

from __future__ import annotations

import subprocess

import image_formatter


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert image_formatter.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["format-images", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "--dry-run" in result.stdout


def test_cli_missing_source_dir_fails_cleanly(tmp_path) -> None:
    """Ensure a missing source directory exits non-zero with a message on stderr."""
    result = subprocess.run(
        ["format-images", f"--source-dir={tmp_path / 'nowhere'}"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 1
    assert "Missing images directory" in result.stderr
    assert result.stdout == ""
