"""One-shot price alert evaluation."""

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence

from cryptodash.models import AlertEvaluation, AlertEvent, AlertRule, AssetQuote

logger = logging.getLogger(__name__)


def snapshot_from_quotes(quotes: Sequence[AssetQuote]) -> dict[str, float]:
    """Build an ``asset_id -> price`` snapshot from dashboard quotes."""
    return {q.id: q.price for q in quotes}


def evaluate_alerts(
    rules: Sequence[AlertRule],
    snapshot: Mapping[str, float],
    now: Optional[datetime] = None,
) -> AlertEvaluation:
    """Evaluate alert rules against a price snapshot.

    Rules are processed in stored order. Each active rule whose asset is
    present in the snapshot is checked (``above``: price >= target,
    ``below``: price <= target); a match emits an AlertEvent and the rule
    is returned deactivated. Inactive rules and rules for assets missing
    from the snapshot pass through unchanged.

    Args:
        rules: Current rule list. It is not modified.
        snapshot: Latest price per asset ID.
        now: Timestamp for fired events (defaults to datetime.now()).

    Returns:
        AlertEvaluation with the fired events and the updated rule list.
    """
    triggered_at = now or datetime.now()
    fired = []
    updated = []

    for rule in rules:
        if not rule.active:
            updated.append(rule)
            continue

        price = snapshot.get(rule.asset_id)
        if price is None:
            logger.debug("No price for %s, skipping alert %d", rule.asset_id, rule.id)
            updated.append(rule)
            continue

        if not rule.is_met(price):
            updated.append(rule)
            continue

        event = AlertEvent(
            rule_id=rule.id,
            asset_id=rule.asset_id,
            asset_name=rule.asset_name,
            condition=rule.condition,
            target_price=rule.target_price,
            trigger_price=price,
            triggered_at=triggered_at,
        )
        logger.info("Alert %d fired: %s", rule.id, event.message)
        fired.append(event)
        updated.append(rule.model_copy(update={"active": False}))

    return AlertEvaluation(fired=fired, updated_rules=updated)
