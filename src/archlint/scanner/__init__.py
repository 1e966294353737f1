"""Scan pipeline: parse, walk, analyze, collect."""

from archlint.scanner.engine import ScanEngine
from archlint.scanner.errors import ScanCancelled, ScanError, WorkspaceError
from archlint.scanner.models import Finding, ScanResult, Severity

__all__ = [
    "Finding",
    "ScanCancelled",
    "ScanEngine",
    "ScanError",
    "ScanResult",
    "Severity",
    "WorkspaceError",
]
