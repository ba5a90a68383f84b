"""Core evaluator — apply a rule set to text line by line.

``evaluate`` is a pure function: it holds no state between calls and
never raises for a bad rule. A rule without a compiled pattern is
skipped, so one malformed rule cannot break a scan.
"""

from __future__ import annotations

import logging
import time
from typing import List, Sequence

from docscan.findings.models import Finding, ScanReport
from docscan.rules.models import Rule

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a trailing ``\\r`` stays part of the line."""
    return text.split("\n")


def evaluate(text: str, file_id: str, rules: Sequence[Rule]) -> List[Finding]:
    """Return every (line, rule) match in *text*, lines outer, rules inner."""
    findings: List[Finding] = []
    if not rules:
        return findings

    for line_no, line in enumerate(split_lines(text), 1):
        for rule in rules:
            cp = rule.compiled_pattern
            if cp is None:
                continue
            if cp.search(line) is None:
                continue
            findings.append(
                Finding(
                    file_id=file_id,
                    rule_id=rule.id,
                    severity=rule.severity,
                    line=line_no,
                    context=line,
                    description=rule.description,
                )
            )

    return findings


def scan_text(text: str, file_id: str, rules: Sequence[Rule]) -> ScanReport:
    """Evaluate *text* and wrap the findings in a timed ScanReport."""
    start = time.perf_counter()
    findings = evaluate(text, file_id, rules)
    elapsed = (time.perf_counter() - start) * 1000

    inert = sum(1 for r in rules if r.compiled_pattern is None)
    if inert:
        logger.debug("%d of %d rules are inert for %s", inert, len(rules), file_id)
    logger.debug("Scanned %s: %d findings in %.1fms", file_id, len(findings), elapsed)

    return ScanReport(
        file_id=file_id,
        findings=findings,
        rules_evaluated=len(rules) - inert,
        scan_duration_ms=round(elapsed, 2),
    )
