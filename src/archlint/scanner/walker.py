"""Workspace walker — finds source files, parses them, builds the import graph."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from archlint.scanner.errors import ScanCancelled, WorkspaceError
from archlint.scanner.models import FileSummary, ImportGraph, SourceLanguage
from archlint.scanner.parser import parse_file
from archlint.scanner.patterns import PatternTable

logger = logging.getLogger(__name__)

# Pruned before descent, at any depth
SKIP_DIRS = frozenset(
    {
        ".git",
        "vendor",
        "node_modules",
        "__pycache__",
        ".venv",
        "dist",
        "build",
    }
)


@dataclass
class Workspace:
    """Everything the rules need from one walk."""

    root: str
    summaries: list[FileSummary] = field(default_factory=list)
    import_graph: ImportGraph = field(default_factory=dict)
    files_skipped: int = 0
    cancelled: bool = False

    @property
    def files_processed(self) -> int:
        return len(self.summaries) + self.files_skipped

    def add(self, summary: FileSummary) -> None:
        self.summaries.append(summary)
        entry = self.import_graph.setdefault(summary.rel_path, [])
        entry.extend(imp.module for imp in summary.imports)


def walk_workspace(
    root: str | Path,
    table: PatternTable,
    cancel_event: threading.Event | None = None,
    workers: int = 1,
) -> Workspace:
    """Parse every recognized source file under ``root``.

    Cancellation is checked before each file. Work done so far is returned
    with ``cancelled`` set; ScanCancelled is raised only if nothing was
    processed.
    """
    root_path = Path(root).resolve()
    if not root_path.exists():
        raise WorkspaceError(f"Workspace root does not exist: {root}")
    if not root_path.is_dir():
        raise WorkspaceError(f"Workspace root is not a directory: {root}")

    cancel_event = cancel_event or threading.Event()
    if cancel_event.is_set():
        raise ScanCancelled(f"Scan of {root_path} cancelled before it started")

    workspace = Workspace(root=str(root_path))

    def parse(path: Path) -> FileSummary | None:
        language = SourceLanguage.from_path(path)
        try:
            return parse_file(path, _graph_key(root_path, path), language, table)
        except OSError as e:
            logger.debug("Skipping %s: %s", path, e)
            return None

    def record(result: FileSummary | None) -> None:
        if result is None:
            workspace.files_skipped += 1
        else:
            workspace.add(result)

    candidates = _iter_source_files(root_path)
    if workers > 1:
        def guarded(path: Path) -> tuple[bool, FileSummary | None]:
            if cancel_event.is_set():
                return False, None
            return True, parse(path)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order, so the graph keeps walk order
            for started, result in pool.map(guarded, candidates):
                if not started:
                    workspace.cancelled = True
                    continue
                record(result)
    else:
        for path in candidates:
            if cancel_event.is_set():
                workspace.cancelled = True
                break
            record(parse(path))

    if workspace.cancelled:
        if workspace.files_processed == 0:
            raise ScanCancelled(f"Scan of {root_path} cancelled before any file")
        logger.info(
            "Scan of %s cancelled after %d files", root_path, workspace.files_processed
        )
    return workspace


def _iter_source_files(root: Path) -> Iterator[Path]:
    """Depth-first, lexically ordered walk yielding recognized source files."""
    for dirpath, dirs, files in os.walk(root, onerror=_log_walk_error):
        dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS)
        for name in sorted(files):
            path = Path(dirpath) / name
            if SourceLanguage.from_path(path) is not None:
                yield path


def _log_walk_error(error: OSError) -> None:
    logger.debug("Cannot list %s: %s", error.filename, error)


def _graph_key(root: Path, path: Path) -> str:
    """Path relative to the root, falling back to the absolute path."""
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return str(path)
    if rel in ("", os.curdir):
        return str(path)
    return rel
