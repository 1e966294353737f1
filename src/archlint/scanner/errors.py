"""Run-level scan failures. File-level failures never reach the caller."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for errors that abort a whole scan."""


class WorkspaceError(ScanError):
    """The workspace root is missing or is not a directory."""


class ScanCancelled(ScanError):
    """The scan was cancelled before any file was processed."""
