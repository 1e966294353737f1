"""Finding collector — keeps findings in emission order."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from archlint.scanner.models import Finding, Severity


class FindingCollector:
    """Accumulates findings across rules and files."""

    def __init__(self) -> None:
        self._findings: list[Finding] = []

    def __len__(self) -> int:
        return len(self._findings)

    def extend(self, findings: Iterable[Finding]) -> None:
        self._findings.extend(findings)

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(self._findings)

    def count_by_rule(self) -> dict[str, int]:
        return dict(Counter(f.rule_id for f in self._findings))

    def count_by_severity(self) -> dict[Severity, int]:
        return dict(Counter(f.severity for f in self._findings))
