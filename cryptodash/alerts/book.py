"""In-memory owner of the alert rule list."""

import logging
import threading
from datetime import datetime
from typing import Iterable, Mapping, Optional

from cryptodash.alerts.evaluator import evaluate_alerts
from cryptodash.models import AlertEvent, AlertRule
from cryptodash.models.alert import AlertCondition

logger = logging.getLogger(__name__)


class AlertBook:
    """Process-lifetime list of alert rules with a single writer.

    All reads and writes go through one lock, so at most one evaluation
    pass runs at a time and user edits never interleave with a pass.
    Nothing is persisted; the list lives as long as the book.
    """

    def __init__(self, rules: Optional[Iterable[AlertRule]] = None):
        """Initialize the book.

        Args:
            rules: Optional initial rules, kept in the given order.
        """
        self._rules: list[AlertRule] = list(rules or [])
        self._lock = threading.Lock()
        self._next_id = max((r.id for r in self._rules), default=0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    @property
    def rules(self) -> list[AlertRule]:
        """Snapshot of all rules in stored order."""
        with self._lock:
            return list(self._rules)

    def active_rules(self) -> list[AlertRule]:
        """Rules that have not fired yet."""
        with self._lock:
            return [r for r in self._rules if r.active]

    def add(
        self,
        asset_id: str,
        target_price: float,
        condition: AlertCondition,
        asset_name: str = "",
    ) -> AlertRule:
        """Create a new active rule and append it to the book.

        Returns:
            The created rule with its assigned ID.
        """
        with self._lock:
            rule = AlertRule(
                id=self._next_id,
                asset_id=asset_id,
                asset_name=asset_name,
                target_price=target_price,
                condition=condition,
                active=True,
                created_at=datetime.now(),
            )
            self._rules.append(rule)
            self._next_id += 1
            return rule

    def get(self, rule_id: int) -> Optional[AlertRule]:
        """Get a rule by ID."""
        with self._lock:
            return next((r for r in self._rules if r.id == rule_id), None)

    def remove(self, rule_id: int) -> bool:
        """Delete a rule.

        Returns:
            True if a rule was removed, False if the ID was unknown.
        """
        with self._lock:
            before = len(self._rules)
            self._rules = [r for r in self._rules if r.id != rule_id]
            return len(self._rules) < before

    def evaluate(
        self,
        snapshot: Mapping[str, float],
        now: Optional[datetime] = None,
    ) -> list[AlertEvent]:
        """Run one evaluation pass and store the deactivated rules.

        Args:
            snapshot: Latest price per asset ID.
            now: Timestamp for fired events.

        Returns:
            Events for the rules that fired during this pass.
        """
        with self._lock:
            result = evaluate_alerts(self._rules, snapshot, now=now)
            self._rules = list(result.updated_rules)

        if result.fired:
            logger.info("%d alert(s) fired", len(result.fired))
        return list(result.fired)
