"""Tests for CLI output formatting helpers.

Verifies:
    - Format badges follow installation order.
    - Output functions produce the expected headings without errors.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from audioshelf.cli.output import (
    format_badges,
    print_error,
    print_inventory,
    print_stats,
    print_usage,
)
from audioshelf.inventory.models import FormatInstallation, ProjectUsage, WireFormat
from audioshelf.projects.models import ExtractedProject
from tests.helpers import BASE_TIME, consolidated_plugin


class TestFormatBadges:
    def test_single_format(self) -> None:
        assert format_badges(consolidated_plugin("Diva")).plain == "VST3"

    def test_installation_order(self) -> None:
        plugin = consolidated_plugin("Serum")
        plugin.formats.insert(0, FormatInstallation(
            WireFormat.AU, Path("/plugins/Serum.component"), 1, BASE_TIME, True,
        ))
        assert format_badges(plugin).plain == "AU VST3"


class TestPrintFunctions:
    def test_empty_inventory(self, capsys) -> None:
        print_inventory([])
        assert "No plugins found" in capsys.readouterr().out

    def test_inventory_table_and_summary(self, capsys) -> None:
        serum = consolidated_plugin("Serum", category="Synthesizer")
        serum.has_metadata = True
        print_inventory([consolidated_plugin("Diva"), serum], warnings=["Directory does not exist: /x"])
        out = capsys.readouterr().out
        assert "AudioShelf Inventory" in out
        assert "2 plugins" in out
        assert "1 need metadata" in out
        assert "1 directories skipped" in out

    def test_usage(self, capsys) -> None:
        plugin = consolidated_plugin("Serum")
        plugin.project_usage = [
            ProjectUsage("Night Drive", Path("/music/Night Drive.als"), datetime(2025, 4, 1)),
        ]
        project = ExtractedProject(
            "Night Drive", Path("/music/Night Drive.als"), "Night Drive.als",
            datetime(2025, 4, 1), ("Serum",),
        )
        print_usage([plugin, consolidated_plugin("Diva")], [project])
        out = capsys.readouterr().out
        assert "Project Usage" in out
        assert "Night Drive" in out

    def test_usage_without_matches(self, capsys) -> None:
        print_usage([consolidated_plugin("Diva")], [])
        assert "No inventory plugins" in capsys.readouterr().out

    def test_stats(self, capsys) -> None:
        print_stats({
            "totalPlugins": 4, "withMetadata": 1, "demos": 0, "usedInProjects": 2,
            "formats": {"VST": 1, "VST3": 3, "AU": 0}, "categories": {"Effect": 4},
        })
        out = capsys.readouterr().out
        assert "Inventory Statistics" in out
        assert "Plugins by Category" in out
        assert "never" in out

    def test_error(self, capsys) -> None:
        print_error("catalog is broken")
        out = capsys.readouterr().out
        assert "Error:" in out and "catalog is broken" in out
