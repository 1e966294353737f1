"""Scanner data models — file summaries, findings and scan results."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from pathlib import Path


class SourceLanguage(enum.Enum):
    """Language of a source file, decided by extension alone."""

    GO = "go"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @classmethod
    def from_path(cls, path: str | Path) -> SourceLanguage | None:
        """Return the language for a file path, or None if unrecognized."""
        return _EXTENSIONS.get(Path(path).suffix)


_EXTENSIONS = {
    ".go": SourceLanguage.GO,
    ".py": SourceLanguage.PYTHON,
    ".js": SourceLanguage.JAVASCRIPT,
    ".ts": SourceLanguage.TYPESCRIPT,
}


class Severity(enum.Enum):
    """Finding severity level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Confidence(enum.Enum):
    """How sure a rule is about its finding."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class ImportReference:
    """One import/require statement found in a file."""

    module: str
    line: int


@dataclass(frozen=True)
class FileSummary:
    """Structural summary of one parsed source file.

    ``rel_path`` is the file's key in the import graph: the path relative
    to the workspace root, or the absolute path when none can be computed.
    """

    path: str
    rel_path: str
    language: SourceLanguage
    lines: tuple[str, ...] = ()
    imports: tuple[ImportReference, ...] = ()
    export_count: int = 0

    @property
    def line_count(self) -> int:
        return len(self.lines)


# file key -> imported module strings, in walk order
ImportGraph = dict[str, list[str]]


@dataclass(frozen=True)
class Finding:
    """A single architecture rule violation."""

    rule_id: str
    severity: Severity
    confidence: Confidence
    message: str
    file_path: str
    start_line: int
    end_line: int
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class ScanResult:
    """Aggregate result of a workspace scan."""

    directory: str
    findings: list[Finding] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    duration: float = 0.0
    cancelled: bool = False
    timestamp: float = field(default_factory=time.time)
