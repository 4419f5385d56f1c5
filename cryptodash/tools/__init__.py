"""Analysis tools for cryptodash."""

from cryptodash.tools.analysis import analyze_window, recommend_trade

__all__ = [
    "analyze_window",
    "recommend_trade",
]
