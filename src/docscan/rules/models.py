"""Rule data model — pattern stored as string, compiled on construction."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

SEVERITIES = frozenset({"low", "medium", "high", "informational"})


def is_valid_severity(severity: str) -> bool:
    """Return True if *severity* is in the allowed set (case-insensitive)."""
    return isinstance(severity, str) and severity.lower() in SEVERITIES


def compile_lenient(rule_id: str, pattern: str) -> Optional[re.Pattern[str]]:
    """Compile *pattern*, returning None if it is not a valid regex.

    A rule left without a compiled pattern is inert during evaluation.
    """
    try:
        return re.compile(pattern)
    except (re.error, TypeError) as exc:
        logger.debug("Rule %r has an uncompilable pattern and will be inert: %s", rule_id, exc)
        return None


@dataclass(frozen=True)
class Rule:
    """A single detection rule.

    ``pattern`` is stored as a raw string so the rule remains serialisable.
    ``compiled_pattern`` is derived at construction and never serialised;
    it is None when the pattern does not compile.
    """

    id: str
    pattern: str
    severity: str = "low"
    description: str = ""

    compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled_pattern", compile_lenient(self.id, self.pattern))

    @property
    def is_inert(self) -> bool:
        return self.compiled_pattern is None

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "pattern": self.pattern,
            "severity": self.severity,
            "description": self.description,
        }
