"""Rule store — owns the active rule set and mediates reads and writes."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from docscan.rules.loader import load_rules
from docscan.rules.models import Rule

logger = logging.getLogger(__name__)


class RuleStore:
    """Holds the active rule set.

    The set is kept as a single immutable tuple swapped under a lock, so a
    reader always sees a complete snapshot, never a partial replacement.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._lock = threading.Lock()
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._revision = 0

    # ---- access ----

    def get_rules(self) -> Tuple[Rule, ...]:
        with self._lock:
            return self._rules

    def set_rules(self, rules: Iterable[Rule]) -> None:
        """Replace the active set. No validation is performed here."""
        snapshot = tuple(rules)
        with self._lock:
            self._rules = snapshot
            self._revision += 1
            revision = self._revision
        logger.info("Activated rule set revision %d with %d rules", revision, len(snapshot))

    @property
    def revision(self) -> int:
        """Number of activations since the store was created."""
        with self._lock:
            return self._revision

    def __len__(self) -> int:
        return len(self.get_rules())

    # ---- loading ----

    def load_from_source(self, path: Union[str, Path]) -> List[Rule]:
        """Load and validate a rule set without touching the active one."""
        rules = load_rules(path)
        logger.debug("Loaded %d rules from %s", len(rules), path)
        return rules

    def load_and_activate(self, path: Union[str, Path]) -> None:
        """Load a rule set and make it active; the active set is unchanged on error."""
        try:
            rules = self.load_from_source(path)
        except Exception as exc:
            logger.error("Failed to load rules from %s: %s", path, exc)
            raise
        self.set_rules(rules)
