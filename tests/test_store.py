"""Tests for the persisted inventory snapshot."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from audioshelf.exceptions import InventoryError
from audioshelf.inventory.models import FormatInstallation, ProjectUsage, WireFormat
from audioshelf.projects.models import ExtractedProject
from audioshelf.store import InventorySnapshot
from tests.helpers import BASE_TIME, consolidated_plugin


def _snapshot(tmp_path: Path) -> InventorySnapshot:
    present = tmp_path / "Serum.vst3"
    present.mkdir()
    serum = consolidated_plugin("Serum", vendor="Xfer Records", paths=(str(present),), category="Synthesizer")
    serum.formats.append(FormatInstallation(
        wire_format=WireFormat.VST, path=tmp_path / "Serum_x64.dll",
        size_bytes=7, modified_at=BASE_TIME, is_bundle=False,
    ))
    serum.has_metadata = True
    serum.metadata_match = "exact"
    serum.tags = {"wavetable", "synth"}
    project = ExtractedProject(
        name="Night Drive", file_path=tmp_path / "Night Drive.als",
        file_name="Night Drive.als", last_modified_at=BASE_TIME, plugin_names=("Serum",),
    )
    serum.project_usage = [ProjectUsage("Night Drive", project.file_path, BASE_TIME)]
    diva = consolidated_plugin("Diva", paths=(str(tmp_path / "Diva.vst3"),))
    diva.is_demo = True
    return InventorySnapshot(
        plugins=[diva, serum],
        projects=[project],
        last_scan=datetime(2025, 3, 2, tzinfo=timezone.utc),
        platform="linux",
        hostname="studio",
    )


class TestSerialization:
    """The JSON document and its round trip."""

    def test_document_layout(self, tmp_path: Path) -> None:
        data = _snapshot(tmp_path).to_dict()
        assert set(data) == {"plugins", "projects", "metadata"}
        assert data["metadata"] == {
            "lastScan": "2025-03-02T00:00:00+00:00",
            "platform": "linux",
            "hostname": "studio",
            "totalPlugins": 2,
            "pluginCounts": {"VST": 1, "VST3": 2, "AU": 0},
        }
        serum = data["plugins"][1]
        assert serum["tags"] == ["synth", "wavetable"]
        assert serum["projectUsage"][0]["projectName"] == "Night Drive"
        assert data["projects"][0]["vstPlugins"] == ["Serum"]

    def test_write_then_read(self, tmp_path: Path) -> None:
        snapshot = _snapshot(tmp_path)
        path = tmp_path / "data" / "plugins.json"
        snapshot.write(path)
        loaded = InventorySnapshot.read(path)
        assert loaded == snapshot

    def test_write_replaces_previous_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / "plugins.json"
        _snapshot(tmp_path).write(path)
        InventorySnapshot(plugins=[], platform="linux").write(path)
        assert json.loads(path.read_text())["plugins"] == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InventoryError, match="audioshelf scan"):
            InventorySnapshot.read(tmp_path / "plugins.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "plugins.json"
        path.write_text("{")
        with pytest.raises(InventoryError):
            InventorySnapshot.read(path)

    @pytest.mark.parametrize(
        "document",
        [[], {"plugins": [{"name": "Serum"}]}, {"metadata": {"lastScan": "yesterday"}}],
    )
    def test_malformed_documents(self, document: object) -> None:
        with pytest.raises(InventoryError):
            InventorySnapshot.from_dict(document)


class TestDerivedViews:
    def test_new_stamps_host(self) -> None:
        snapshot = InventorySnapshot.new([consolidated_plugin("Serum")])
        assert snapshot.last_scan is not None
        assert snapshot.platform in {"macos", "windows", "linux"}

    def test_with_projects_keeps_scan_metadata(self, tmp_path: Path) -> None:
        snapshot = _snapshot(tmp_path)
        updated = snapshot.with_projects([], [consolidated_plugin("Vital")])
        assert updated.last_scan == snapshot.last_scan
        assert [p.display_name for p in updated.plugins] == ["Vital"]
        assert updated.projects == []
        assert len(snapshot.plugins) == 2

    def test_stats(self, tmp_path: Path) -> None:
        stats = _snapshot(tmp_path).stats()
        assert stats["totalPlugins"] == 2
        assert stats["formats"] == {"VST": 1, "VST3": 2, "AU": 0}
        assert stats["categories"] == {"Other": 1, "Synthesizer": 1}
        assert (stats["withMetadata"], stats["demos"]) == (1, 1)
        assert (stats["usedInProjects"], stats["projects"]) == (1, 1)

    def test_verify(self, tmp_path: Path) -> None:
        report = _snapshot(tmp_path).verify()
        assert report.installed == 1
        assert not report.ok
        assert sorted(name for name, _ in report.missing) == ["Diva", "Serum"]


class TestExportImport:
    """Portable plugin lists merged by id and key."""

    def test_export_document(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "export.json"
        _snapshot(tmp_path).export(target)
        document = json.loads(target.read_text())
        assert set(document) == {"exportDate", "exportedBy", "platform", "hostname", "plugins"}
        assert document["exportedBy"] == "AudioShelf"
        assert [p["name"] for p in document["plugins"]] == ["Diva", "Serum"]

    def test_import_adds_only_new_plugins(self, tmp_path: Path) -> None:
        target = tmp_path / "export.json"
        InventorySnapshot(plugins=[
            consolidated_plugin("Serum", paths=("/other/Serum.vst3",)),
            consolidated_plugin("Vital", paths=("/other/Vital.vst3",)),
            consolidated_plugin("Serum FX", key="serum", paths=("/other/SerumFX.vst3",)),
        ]).export(target)
        snapshot = _snapshot(tmp_path)
        merged = snapshot.import_(target)
        assert [p.display_name for p in merged.plugins] == ["Diva", "Serum", "Vital"]
        assert merged.last_scan == snapshot.last_scan
        assert len(snapshot.plugins) == 2

    def test_import_same_id_skipped(self, tmp_path: Path) -> None:
        snapshot = _snapshot(tmp_path)
        target = tmp_path / "export.json"
        snapshot.export(target)
        assert snapshot.import_(target).plugins == snapshot.plugins

    def test_import_into_empty_inventory(self, tmp_path: Path) -> None:
        target = tmp_path / "export.json"
        _snapshot(tmp_path).export(target)
        merged = InventorySnapshot().import_(target)
        assert [p.display_name for p in merged.plugins] == ["Diva", "Serum"]
        assert merged.plugins[1].project_usage[0].project_name == "Night Drive"

    @pytest.mark.parametrize(
        "content",
        ["{", "[]", '{"plugins": {}}', '{"exportedBy": "AudioShelf"}', '{"plugins": [{"name": "Serum"}]}'],
    )
    def test_import_rejects_bad_documents(self, tmp_path: Path, content: str) -> None:
        target = tmp_path / "export.json"
        target.write_text(content)
        with pytest.raises(InventoryError):
            _snapshot(tmp_path).import_(target)

    def test_import_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InventoryError, match="No export file"):
            _snapshot(tmp_path).import_(tmp_path / "absent.json")
