"""Rule-set loading — read, deserialise, validate and compile.

This is the strict path: any invalid rule aborts the whole load and
nothing is returned. Rule-set documents are YAML (JSON also parses)::

    rules:
      - id: r1
        pattern: "foo"
        severity: high
        description: contains foo

A bare top-level list of rule records is accepted as well.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

import yaml

from docscan.rules.models import SEVERITIES, Rule, is_valid_severity


class RuleError(Exception):
    """Base class for rule-set loading errors."""


class SourceReadError(RuleError):
    """Raised when a rule-set source cannot be read or has the wrong shape."""


class ValidationError(RuleError):
    """Raised when a proposed rule set violates a rule-set invariant."""

    def __init__(self, message: str, rule_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.rule_id = rule_id


def compile_strict(rule: Rule) -> re.Pattern[str]:
    """Compile *rule*'s pattern, raising ValidationError on failure."""
    try:
        return re.compile(rule.pattern)
    except re.error as exc:
        raise ValidationError(
            f"Rule {rule.id!r}: invalid pattern {rule.pattern!r}: {exc}",
            rule_id=rule.id,
        ) from exc


def validate_rules(rules: Sequence[Rule]) -> None:
    """Check every rule-set invariant, raising on the first violation."""
    seen: set[str] = set()
    for index, rule in enumerate(rules):
        if not rule.id:
            raise ValidationError(f"Rule #{index + 1} has an empty id", rule_id=rule.id)
        if rule.id in seen:
            raise ValidationError(f"Duplicate rule id {rule.id!r}", rule_id=rule.id)
        seen.add(rule.id)
        if not is_valid_severity(rule.severity):
            allowed = ", ".join(sorted(SEVERITIES))
            raise ValidationError(
                f"Rule {rule.id!r}: invalid severity {rule.severity!r} (allowed: {allowed})",
                rule_id=rule.id,
            )
        compile_strict(rule)


def _require_str(record: dict, key: str, index: int, default: Optional[str] = None) -> str:
    value = record.get(key)
    if value is None:
        if default is not None:
            return default
        raise SourceReadError(f"Rule #{index + 1} is missing required key {key!r}")
    # YAML scalars such as ``id: 100`` or ``pattern: 4111`` are read as text.
    if isinstance(value, (bool, int, float)):
        return str(value)
    if not isinstance(value, str):
        raise SourceReadError(
            f"Rule #{index + 1}: {key!r} must be a string, got {type(value).__name__}"
        )
    return value


def rules_from_records(records: Iterable[Any]) -> List[Rule]:
    """Turn parsed rule records into typed Rule objects (no validation)."""
    rules: List[Rule] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise SourceReadError(f"Rule #{index + 1} must be a mapping")
        rules.append(
            Rule(
                id=_require_str(record, "id", index, default=""),
                pattern=_require_str(record, "pattern", index),
                severity=_require_str(record, "severity", index),
                description=_require_str(record, "description", index, default=""),
            )
        )
    return rules


def parse_rule_document(data: Union[str, bytes]) -> List[Rule]:
    """Parse a YAML/JSON rule-set document into Rule objects (no validation)."""
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise SourceReadError(f"Malformed rule-set document: {exc}") from exc

    if isinstance(doc, dict):
        if "rules" not in doc:
            raise SourceReadError("Rule-set document has no 'rules' key")
        records = doc["rules"]
    else:
        records = doc
    if records is None:
        records = []
    if not isinstance(records, list):
        raise SourceReadError("'rules' must be a list of rule records")
    return rules_from_records(records)


def load_rules_from_records(records: Iterable[Any]) -> List[Rule]:
    """Deserialise and validate already-parsed rule records."""
    rules = rules_from_records(records)
    validate_rules(rules)
    return rules


def load_rules(path: Union[str, Path]) -> List[Rule]:
    """Read, parse, validate and compile the rule set at *path*."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise SourceReadError(f"Cannot read rule set {p}: {exc}") from exc
    rules = parse_rule_document(data)
    validate_rules(rules)
    return rules
