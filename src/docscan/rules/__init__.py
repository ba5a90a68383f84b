"""Rule engine — models, loading/validation, the active rule store."""

from docscan.rules.loader import (
    RuleError,
    SourceReadError,
    ValidationError,
    compile_strict,
    load_rules,
    load_rules_from_records,
    parse_rule_document,
    rules_from_records,
    validate_rules,
)
from docscan.rules.models import SEVERITIES, Rule, compile_lenient
from docscan.rules.store import RuleStore

__all__ = [
    "SEVERITIES",
    "Rule",
    "RuleError",
    "RuleStore",
    "SourceReadError",
    "ValidationError",
    "compile_lenient",
    "compile_strict",
    "load_rules",
    "load_rules_from_records",
    "parse_rule_document",
    "rules_from_records",
    "validate_rules",
]
