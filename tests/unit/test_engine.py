"""End-to-end tests for the scan engine."""

from __future__ import annotations

import threading

import pytest

from archlint.scanner.collector import FindingCollector
from archlint.scanner.engine import ScanEngine
from archlint.scanner.errors import ScanCancelled, WorkspaceError
from archlint.scanner.models import Severity


def _rule_ids(result) -> list[str]:
    return [f.rule_id for f in result.findings]


class TestScenarios:
    def test_security_mixing_and_missing_abstraction(self, workspace, copy_fixture):
        copy_fixture("mixed_security.go")
        result = ScanEngine().scan(workspace)

        arch3 = [f for f in result.findings if f.rule_id == "ARCH-003"]
        assert len(arch3) == 1
        assert arch3[0].start_line == 4
        assert "(crypto)" in arch3[0].message

        arch4 = [f for f in result.findings if f.rule_id == "ARCH-004"]
        assert [f.start_line for f in arch4] == [34]
        assert "INSERT INTO payments" in arch4[0].message

    def test_handler_with_sql(self, workspace, copy_fixture):
        copy_fixture("handler_with_sql.go")
        result = ScanEngine().scan(workspace)

        assert _rule_ids(result) == ["ARCH-004", "ARCH-004"]
        assert [f.start_line for f in result.findings] == [14, 33]

    def test_god_file(self, workspace, write_file, go_source):
        write_file("big.go", go_source(520, 12))
        result = ScanEngine().scan(workspace)

        [finding] = result.findings
        assert finding.rule_id == "ARCH-002"
        assert finding.metadata["line_count"] == "520"
        assert finding.metadata["export_count"] == "12"

    def test_circular_dependency(self, workspace, write_file):
        write_file("a/x.go", 'package a\n\nimport (\n\t"example.com/mod/b"\n)\n')
        write_file("b/y.go", 'package b\n\nimport (\n\t"example.com/mod/a"\n)\n')
        result = ScanEngine().scan(workspace)

        assert _rule_ids(result) == ["ARCH-001"]

    def test_empty_workspace(self, workspace):
        result = ScanEngine().scan(workspace)
        assert result.findings == []
        assert result.files_scanned == 0


class TestBoundaries:
    def test_empty_root_is_nothing_to_scan(self):
        result = ScanEngine().scan("")
        assert result.findings == []
        assert result.directory == ""

    def test_missing_root_fails(self, tmp_path):
        with pytest.raises(WorkspaceError):
            ScanEngine().scan(tmp_path / "missing")

    def test_cancelled_before_start(self, workspace, copy_fixture):
        copy_fixture("mixed_security.go")
        event = threading.Event()
        event.set()
        with pytest.raises(ScanCancelled):
            ScanEngine().scan(workspace, cancel_event=event)

    @pytest.mark.parametrize("skipped", ["node_modules", "vendor", ".git", "build"])
    def test_skipped_dirs_never_reported(self, workspace, copy_fixture, skipped):
        copy_fixture("mixed_security.go", dest=f"{skipped}/mixed_security.go")
        copy_fixture("handler_with_sql.go", dest=f"src/{skipped}/handler.go")
        result = ScanEngine().scan(workspace)

        assert result.findings == []
        assert result.files_scanned == 0

    def test_every_finding_has_language_and_single_line_range(
        self, workspace, copy_fixture, write_file, go_source
    ):
        copy_fixture("mixed_security.go")
        copy_fixture("handler_with_sql.go", dest="api/handler.go")
        write_file("big.go", go_source(600, 20))
        result = ScanEngine(workers=3).scan(workspace)

        assert result.files_scanned == 3
        assert result.findings
        for finding in result.findings:
            assert finding.metadata["language"] == "go"
            assert finding.start_line == finding.end_line
            assert finding.file_path.startswith(result.directory)


class TestCollector:
    def test_counts(self, workspace, copy_fixture):
        copy_fixture("mixed_security.go")
        result = ScanEngine().scan(workspace)

        collector = FindingCollector()
        collector.extend(result.findings)
        assert len(collector) == 2
        assert collector.count_by_rule() == {"ARCH-003": 1, "ARCH-004": 1}
        assert collector.count_by_severity() == {Severity.HIGH: 1, Severity.LOW: 1}
