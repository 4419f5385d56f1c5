"""Number formatting helpers for dashboard output."""

_COMPACT_UNITS = (
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)


def format_price(price: float) -> str:
    """Format a price, keeping four decimals for sub-unit assets."""
    return f"{price:.4f}" if price < 1 else f"{price:.2f}"


def format_compact(value: float) -> str:
    """Format a large quantity in compact notation (e.g. 28.5B)."""
    for threshold, suffix in _COMPACT_UNITS:
        if abs(value) >= threshold:
            return f"{value / threshold:.1f}".rstrip("0").rstrip(".") + suffix
    return f"{value:g}"
