"""Price alerts for cryptodash."""

from cryptodash.alerts.evaluator import evaluate_alerts, snapshot_from_quotes
from cryptodash.alerts.book import AlertBook

__all__ = [
    "AlertBook",
    "evaluate_alerts",
    "snapshot_from_quotes",
]
