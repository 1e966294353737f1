"""Host adapter — manifest, scan request handling and wire mapping."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from archlint import __version__
from archlint.scanner.engine import ScanEngine
from archlint.scanner.models import Finding

MANIFEST: dict[str, Any] = {
    "name": "archlint",
    "version": __version__,
    "capabilities": [
        {
            "name": "arch-lint",
            "description": "Architecture risk and design lint for source code",
            "tools": [
                {
                    "name": "scan",
                    "description": (
                        "Detect circular dependencies, god objects, "
                        "security-critical code mixing, and missing "
                        "abstraction layers"
                    ),
                    "read_only": True,
                }
            ],
        }
    ],
    "safety": {"risk_class": "passive"},
}


def finding_to_wire(finding: Finding) -> dict[str, Any]:
    return {
        "rule_id": finding.rule_id,
        "severity": finding.severity.value,
        "confidence": finding.confidence.value,
        "message": finding.message,
        "location": {
            "file_path": finding.file_path,
            "start_line": finding.start_line,
            "end_line": finding.end_line,
        },
        "metadata": dict(finding.metadata),
    }


def workspace_root_from(request: Mapping[str, Any]) -> str:
    """Tool input wins over the request-level workspace root."""
    tool_input = request.get("input") or {}
    root = tool_input.get("workspace_root") if isinstance(tool_input, Mapping) else None
    if isinstance(root, str) and root:
        return root
    root = request.get("workspace_root")
    return root if isinstance(root, str) else ""


def handle_scan(
    request: Mapping[str, Any],
    engine: ScanEngine | None = None,
    cancel_event: threading.Event | None = None,
) -> dict[str, Any]:
    """Run a scan for a host request and build the response payload."""
    root = workspace_root_from(request)
    if not root:
        return {"findings": []}

    engine = engine or ScanEngine()
    result = engine.scan(root, cancel_event=cancel_event)
    return {
        "findings": [finding_to_wire(f) for f in result.findings],
        "files_scanned": result.files_scanned,
        "files_skipped": result.files_skipped,
        "cancelled": result.cancelled,
    }
