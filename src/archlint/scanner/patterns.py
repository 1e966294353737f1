"""Line-matching pattern tables, one per source language plus a shared set.

Matching is strictly line-local: declarations split across several lines
are not recognized.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from archlint.scanner.models import SourceLanguage


def _first_group(m: re.Match[str]) -> str:
    return next((g for g in m.groups() if g), "")


@dataclass(frozen=True)
class ImportPattern:
    """An import-statement regex and how to pull the module token out of it."""

    regex: re.Pattern[str]
    extract_module: Callable[[re.Match[str]], str] = _first_group


@dataclass(frozen=True)
class LanguagePatterns:
    """Matchers that only make sense for one language."""

    imports: tuple[ImportPattern, ...]
    exports: tuple[re.Pattern[str], ...]
    crypto: tuple[re.Pattern[str], ...]
    auth: tuple[re.Pattern[str], ...]
    handlers: tuple[re.Pattern[str], ...]

    def extract_import(self, line: str) -> str:
        """Return the imported module on this line, or "" if there is none."""
        for pattern in self.imports:
            m = pattern.regex.search(line)
            if m:
                return pattern.extract_module(m)
        return ""

    def is_export(self, line: str) -> bool:
        return matches_any(self.exports, line)


@dataclass(frozen=True)
class SharedPatterns:
    """Matchers applied identically to every supported language."""

    business_logic: re.Pattern[str]
    data_access: re.Pattern[str]
    http_route: re.Pattern[str]
    handler_route: re.Pattern[str]
    sql_in_handler: re.Pattern[str]


@dataclass(frozen=True)
class PatternTable:
    """All pattern tables for one scan, built once and shared read-only."""

    languages: Mapping[SourceLanguage, LanguagePatterns]
    shared: SharedPatterns

    def for_language(self, language: SourceLanguage) -> LanguagePatterns:
        return self.languages[language]


def matches_any(patterns: Iterable[re.Pattern[str]], line: str) -> bool:
    return any(p.search(line) for p in patterns)


def shared_patterns() -> SharedPatterns:
    return SharedPatterns(
        business_logic=re.compile(
            r"(?:func|def|function)\s+\w*"
            r"(?:handle|process|create|update|delete|get|list|fetch|save|submit"
            r"|calculate|compute)\w*\s*\(",
            re.IGNORECASE,
        ),
        data_access=re.compile(
            r"(?:\.(?:Query|Exec|Execute|Find|Create|Save|Delete|Remove|Insert"
            r"|Update)\s*\(|SELECT\s|INSERT\s|UPDATE\s|DELETE\s)",
            re.IGNORECASE,
        ),
        http_route=re.compile(
            r"(?:app\.(?:get|post|put|delete|patch)|http\.HandleFunc|router\.|@app\.route)",
            re.IGNORECASE,
        ),
        handler_route=re.compile(
            r"(?:app|router)\.\s*(?:get|post|put|delete|patch)",
            re.IGNORECASE,
        ),
        sql_in_handler=re.compile(
            r"(?:SELECT\s+.+\s+FROM|INSERT\s+INTO|UPDATE\s+.+\s+SET|DELETE\s+FROM"
            r"|db\.(?:Query|Exec|Execute|Raw)\s*\()",
            re.IGNORECASE,
        ),
    )


def build_pattern_table() -> PatternTable:
    """Compile the tables for every supported language."""
    from archlint.scanner.languages.go import go_patterns
    from archlint.scanner.languages.javascript import javascript_patterns
    from archlint.scanner.languages.python import python_patterns

    tables = {
        SourceLanguage.GO: go_patterns(),
        SourceLanguage.PYTHON: python_patterns(),
        SourceLanguage.JAVASCRIPT: javascript_patterns(),
        SourceLanguage.TYPESCRIPT: javascript_patterns(),
    }
    return PatternTable(languages=MappingProxyType(tables), shared=shared_patterns())
