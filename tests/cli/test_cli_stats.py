"""Tests for ``audioshelf stats``."""

from __future__ import annotations

import json
import shutil
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner, Result

from audioshelf.cli.main import cli


class TestStatsCommand:
    def test_json(self, invoke: Callable[..., Result], scanned: Path) -> None:
        result = invoke("stats", "--format", "json")
        assert result.exit_code == 0
        stats = json.loads(result.output)
        assert stats["totalPlugins"] == 3
        assert stats["formats"] == {"VST": 0, "VST3": 3, "AU": 0}
        assert stats["withMetadata"] == 1
        assert stats["projects"] == 0

    def test_text(self, invoke: Callable[..., Result], scanned: Path) -> None:
        result = invoke("stats")
        assert result.exit_code == 0
        assert "Inventory Statistics" in result.output
        assert "Installations by Format" in result.output

    def test_verify_all_present(self, invoke: Callable[..., Result], scanned: Path) -> None:
        result = invoke("stats", "--verify", "--format", "json")
        assert result.exit_code == 0
        stats = json.loads(result.output)
        assert (stats["installed"], stats["missing"]) == (3, [])

    def test_verify_reports_removed_plugin(
        self, runner: CliRunner, config_file: Path, data_dir: Path, scanned: Path, vst3_dir: Path,
    ) -> None:
        shutil.rmtree(vst3_dir / "Vital.vst3")
        result = runner.invoke(cli, [
            "--config", str(config_file), "--data-dir", str(data_dir),
            "stats", "--verify",
        ])
        assert result.exit_code == 1
        assert "Vital" in result.output

    def test_without_inventory_exits_1(self, invoke: Callable[..., Result]) -> None:
        result = invoke("stats")
        assert result.exit_code == 1
        assert "No inventory" in result.output
