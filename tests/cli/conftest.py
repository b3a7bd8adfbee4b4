"""Shared fixtures for CLI tests.

Every invocation gets its own config file and data directory under
``tmp_path`` so the user's ``~/.audioshelf`` is never read or written.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from audioshelf.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """An empty config file, so only command-line options apply."""
    path = tmp_path / "config.yaml"
    path.write_text("{}\n")
    return path


@pytest.fixture
def invoke(runner: CliRunner, config_file: Path, data_dir: Path) -> Callable[..., Result]:
    """Run ``audioshelf`` quietly against the temporary config and data dir."""

    def _invoke(*args: str) -> Result:
        base = ["--config", str(config_file), "--data-dir", str(data_dir), "-q"]
        return runner.invoke(cli, [*base, *args])

    return _invoke


@pytest.fixture
def vst3_dir(tmp_path: Path) -> Path:
    """A VST3 folder with two vendor bundles and one loose bundle."""
    root = tmp_path / "vst3"
    for relative in ("Xfer Records/Serum.vst3", "u-he/Diva.vst3", "Vital.vst3"):
        binary = root / relative / "Contents" / "plugin.bin"
        binary.parent.mkdir(parents=True)
        binary.write_bytes(b"x" * 16)
    return root


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """A catalog that knows Serum only."""
    path = tmp_path / "catalog.json"
    path.write_text(
        '{"version": "1.0.0", "plugins": {"serum": {"name": "Serum", '
        '"vendor": "Xfer Records", "category": "Synthesizer", '
        '"subcategory": "Wavetable", "tags": ["synth"]}}}'
    )
    return path


@pytest.fixture
def scanned(
    invoke: Callable[..., Result], vst3_dir: Path, catalog_file: Path, data_dir: Path,
) -> Path:
    """Run a scan and return the saved inventory path."""
    result = invoke("scan", "--plugin-dir", f"VST3={vst3_dir}", "--catalog", str(catalog_file))
    assert result.exit_code == 0, result.output
    return data_dir / "plugins.json"
