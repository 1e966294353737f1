"""Scan engine — walks a workspace and runs every rule over it."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from archlint.scanner.models import ScanResult
from archlint.scanner.patterns import PatternTable, build_pattern_table
from archlint.scanner.rules import run_rules
from archlint.scanner.walker import walk_workspace

logger = logging.getLogger(__name__)


class ScanEngine:
    """Orchestrates the walk and the rule engine for one workspace at a time."""

    def __init__(
        self,
        workers: int = 1,
        table: PatternTable | None = None,
    ) -> None:
        self._workers = max(1, workers)
        self._table = table or build_pattern_table()

    def scan(
        self,
        directory: str | Path | None,
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """Scan a workspace root and return its findings.

        An empty root means there is nothing to scan. WorkspaceError and
        ScanCancelled propagate to the caller.
        """
        if not directory:
            return ScanResult(directory="")

        start = time.time()
        workspace = walk_workspace(
            directory,
            self._table,
            cancel_event=cancel_event,
            workers=self._workers,
        )
        collector = run_rules(workspace.summaries, workspace.import_graph, self._table)

        result = ScanResult(
            directory=workspace.root,
            findings=list(collector.findings),
            files_scanned=len(workspace.summaries),
            files_skipped=workspace.files_skipped,
            cancelled=workspace.cancelled,
        )
        result.duration = time.time() - start
        logger.debug(
            "Scanned %d files in %s: %s",
            result.files_scanned,
            workspace.root,
            collector.count_by_rule() or "no findings",
        )
        return result
