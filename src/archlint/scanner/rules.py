"""Rule engine — four independent architecture analyzers.

Every analyzer has the same shape: ``(summary, import_graph, table) ->
list[Finding]``. Analyzers never mutate their inputs and never talk to
each other, so they can run in any order or in parallel.
"""

from __future__ import annotations

import enum
import functools
from collections.abc import Callable, Iterable, Iterator
from pathlib import PurePath

from archlint.scanner.collector import FindingCollector
from archlint.scanner.models import (
    Confidence,
    FileSummary,
    Finding,
    ImportGraph,
    Severity,
)
from archlint.scanner.patterns import PatternTable, matches_any

GOD_FILE_LINE_THRESHOLD = 500
GOD_FILE_EXPORT_THRESHOLD = 10


class RuleKind(enum.Enum):
    """The closed set of rules, keyed by their public rule ID."""

    CIRCULAR_DEPENDENCY = "ARCH-001"
    GOD_OBJECT = "ARCH-002"
    SECURITY_MIXING = "ARCH-003"
    MISSING_ABSTRACTION = "ARCH-004"

    @property
    def severity(self) -> Severity:
        return _LEVELS[self][0]

    @property
    def confidence(self) -> Confidence:
        return _LEVELS[self][1]


_LEVELS = {
    RuleKind.CIRCULAR_DEPENDENCY: (Severity.MEDIUM, Confidence.HIGH),
    RuleKind.GOD_OBJECT: (Severity.MEDIUM, Confidence.MEDIUM),
    RuleKind.SECURITY_MIXING: (Severity.HIGH, Confidence.HIGH),
    RuleKind.MISSING_ABSTRACTION: (Severity.LOW, Confidence.MEDIUM),
}

Analyzer = Callable[[FileSummary, ImportGraph, PatternTable], list[Finding]]


def _finding(
    rule: RuleKind,
    summary: FileSummary,
    line: int,
    message: str,
    **metadata: str,
) -> Finding:
    metadata["language"] = summary.language.value
    return Finding(
        rule_id=rule.value,
        severity=rule.severity,
        confidence=rule.confidence,
        message=message,
        file_path=summary.path,
        start_line=line,
        end_line=line,
        metadata=metadata,
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"


# --- ARCH-001: circular dependency ---


def _last_segment(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def package_of(file_key: str) -> str:
    """Name of the package a file belongs to: its directory's last segment."""
    return _last_segment(PurePath(file_key).parent.as_posix())


def resolves_to_package(module: str, package: str) -> bool:
    """Whether an import token plausibly names ``package``.

    A path heuristic, not import resolution: the token's last segment
    must equal the package name, or the token must end in ``/<package>``.
    """
    return _last_segment(module) == package or module.endswith("/" + package)


def _mutual_partners(
    key: str,
    modules: Iterable[str],
    graph: ImportGraph,
    packages: dict[str, str],
) -> Iterator[tuple[int, str]]:
    """Yield (import index, other file) for every mutual import, in import order."""
    my_pkg = packages[key]
    for index, module in enumerate(modules):
        for other_key, other_imports in graph.items():
            if other_key == key:
                continue
            if not resolves_to_package(module, packages[other_key]):
                continue
            if any(resolves_to_package(imp, my_pkg) for imp in other_imports):
                yield index, other_key


FrozenGraph = tuple[tuple[str, tuple[str, ...]], ...]


@functools.lru_cache(maxsize=4)
def _reported_pairs(frozen: FrozenGraph) -> dict[str, tuple[int, str] | None]:
    """The mutual pair each file reports, computed once per graph in walk order.

    A file skips a partner that comes earlier in walk order when that
    partner already reported this file.
    """
    graph = {key: list(modules) for key, modules in frozen}
    packages = {key: package_of(key) for key in graph}
    reported: dict[str, tuple[int, str] | None] = {}
    for key, modules in graph.items():
        result = None
        for index, partner in _mutual_partners(key, modules, graph, packages):
            # Only earlier files are in ``reported`` yet
            earlier = reported.get(partner)
            if earlier is not None and earlier[1] == key:
                continue
            result = (index, partner)
            break
        reported[key] = result
    return reported


def _freeze(graph: ImportGraph) -> FrozenGraph:
    return tuple((key, tuple(modules)) for key, modules in graph.items())


def check_circular_dependency(
    summary: FileSummary,
    graph: ImportGraph,
    table: PatternTable,
) -> list[Finding]:
    key = summary.rel_path
    if key not in graph:
        graph = {**graph, key: [imp.module for imp in summary.imports]}

    pair = _reported_pairs(_freeze(graph)).get(key)
    if pair is None:
        return []

    index, partner = pair
    imp = summary.imports[index]
    return [
        _finding(
            RuleKind.CIRCULAR_DEPENDENCY,
            summary,
            imp.line,
            f"Circular dependency risk: {key} imports {imp.module} which imports back",
            imported_module=imp.module,
            partner_file=partner,
        )
    ]


# --- ARCH-002: god object ---


def check_god_object(
    summary: FileSummary,
    graph: ImportGraph,
    table: PatternTable,
) -> list[Finding]:
    if (
        summary.line_count <= GOD_FILE_LINE_THRESHOLD
        or summary.export_count < GOD_FILE_EXPORT_THRESHOLD
    ):
        return []
    return [
        _finding(
            RuleKind.GOD_OBJECT,
            summary,
            1,
            f"God object/file detected: {summary.line_count} lines "
            f"with {summary.export_count} exports",
            line_count=str(summary.line_count),
            export_count=str(summary.export_count),
        )
    ]


# --- ARCH-003: security-critical code mixed with business logic ---


def check_security_mixing(
    summary: FileSummary,
    graph: ImportGraph,
    table: PatternTable,
) -> list[Finding]:
    lang = table.for_language(summary.language)
    shared = table.shared

    crypto_line = auth_line = 0
    has_biz = has_db = has_route = False

    for line_num, line in enumerate(summary.lines, start=1):
        if not crypto_line and matches_any(lang.crypto, line):
            crypto_line = line_num
        if not auth_line and matches_any(lang.auth, line):
            auth_line = line_num
        has_biz = has_biz or bool(shared.business_logic.search(line))
        has_db = has_db or bool(shared.data_access.search(line))
        has_route = has_route or bool(shared.http_route.search(line))

    has_crypto = crypto_line > 0
    has_auth = auth_line > 0
    if not (has_crypto or has_auth) or not (has_biz or has_db or has_route):
        return []

    if has_crypto and has_auth:
        detail = "crypto/auth"
    elif has_auth:
        detail = "auth"
    else:
        detail = "crypto"

    return [
        _finding(
            RuleKind.SECURITY_MIXING,
            summary,
            crypto_line or auth_line,
            f"Security-critical code ({detail}) mixed with business logic in same file",
            has_crypto=_flag(has_crypto),
            has_auth=_flag(has_auth),
            has_business_logic=_flag(has_biz),
            has_data_access=_flag(has_db),
            has_http_route=_flag(has_route),
        )
    ]


# --- ARCH-004: missing abstraction layer ---


def _is_handler_file(summary: FileSummary, table: PatternTable) -> bool:
    handlers = table.for_language(summary.language).handlers
    route = table.shared.handler_route
    return any(
        route.search(line) or matches_any(handlers, line)
        for line in summary.lines
    )


def check_missing_abstraction(
    summary: FileSummary,
    graph: ImportGraph,
    table: PatternTable,
) -> list[Finding]:
    if not _is_handler_file(summary, table):
        return []

    sql = table.shared.sql_in_handler
    return [
        _finding(
            RuleKind.MISSING_ABSTRACTION,
            summary,
            line_num,
            "Missing abstraction layer: direct database call in handler: "
            f"{line.strip()}",
        )
        for line_num, line in enumerate(summary.lines, start=1)
        if sql.search(line)
    ]


ANALYZERS: dict[RuleKind, Analyzer] = {
    RuleKind.CIRCULAR_DEPENDENCY: check_circular_dependency,
    RuleKind.GOD_OBJECT: check_god_object,
    RuleKind.SECURITY_MIXING: check_security_mixing,
    RuleKind.MISSING_ABSTRACTION: check_missing_abstraction,
}


def run_rules(
    summaries: Iterable[FileSummary],
    graph: ImportGraph,
    table: PatternTable,
    rules: Iterable[RuleKind] = tuple(RuleKind),
) -> FindingCollector:
    """Run every rule over every file, file by file, in rule ID order."""
    rules = tuple(rules)
    collector = FindingCollector()
    for summary in summaries:
        for rule in rules:
            collector.extend(ANALYZERS[rule](summary, graph, table))
    return collector
