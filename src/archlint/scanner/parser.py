"""Single-pass file parser — imports, export count and raw lines."""

from __future__ import annotations

from pathlib import Path

from archlint.scanner.models import FileSummary, ImportReference, SourceLanguage
from archlint.scanner.patterns import PatternTable


def parse_file(
    path: str | Path,
    rel_path: str,
    language: SourceLanguage,
    table: PatternTable,
) -> FileSummary:
    """Read one file and summarize it.

    Only the import and export matchers of the file's own language are
    applied here; the cross-language matchers are left to the rules.
    Raises OSError if the file cannot be read.
    """
    patterns = table.for_language(language)
    lines: list[str] = []
    imports: list[ImportReference] = []
    exports = 0

    with open(path, encoding="utf-8", errors="ignore", newline="") as fh:
        text = fh.read()

    for line_num, line in enumerate(split_lines(text), start=1):
        lines.append(line)

        module = patterns.extract_import(line)
        if module:
            imports.append(ImportReference(module=module, line=line_num))
        if patterns.is_export(line):
            exports += 1

    return FileSummary(
        path=str(path),
        rel_path=rel_path,
        language=language,
        lines=tuple(lines),
        imports=tuple(imports),
        export_count=exports,
    )


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line.

    A lone ``\\r`` stays inside its line. A final newline does not start
    an extra empty line.
    """
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]
