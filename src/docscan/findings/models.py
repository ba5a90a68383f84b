"""Finding data models."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Finding:
    """A single match of one rule against one line of one document."""

    file_id: str
    rule_id: str
    severity: str
    line: int  # 1-based
    context: str  # full text of the matching line
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_id": self.file_id,
            "rule_id": self.rule_id,
            "severity": self.severity,
            "line": self.line,
            "context": self.context,
            "description": self.description,
        }


@dataclass
class ScanReport:
    """Findings for one scanned document."""

    file_id: str
    findings: List[Finding] = field(default_factory=list)
    rules_evaluated: int = 0
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def severity_counts(self) -> Dict[str, int]:
        return dict(Counter(f.severity.lower() for f in self.findings))
