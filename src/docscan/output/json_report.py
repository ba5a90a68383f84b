"""JSON reporter."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from docscan.findings.models import Finding, ScanReport


def findings_to_list(findings: List[Finding]) -> List[Dict[str, Any]]:
    """Serialise findings in evaluation order."""
    return [f.to_dict() for f in findings]


def to_dict(report: ScanReport) -> Dict[str, Any]:
    """Convert a ScanReport to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "file_id": report.file_id,
        "total_findings": report.total_findings,
        "severity_counts": report.severity_counts,
        "findings": findings_to_list(report.findings),
        "scan_duration_ms": report.scan_duration_ms,
    }


def render(report: ScanReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
