"""Candlestick pattern classifier.

Rules are independent predicates over the trailing five candles of a
window. All matching rules are reported in table order; nothing is
deduplicated or ranked, and the confidence of each rule is a fixed
literal.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from cryptodash.models import Candle, Pattern
from cryptodash.models.pattern import Polarity

TAIL_SIZE = 5
MIN_CANDLES = 3


def _body(c: Candle) -> float:
    return abs(c.close - c.open)


def _range(c: Candle) -> float:
    return c.high - c.low


def _upper_shadow(c: Candle) -> float:
    return c.high - max(c.open, c.close)


def _lower_shadow(c: Candle) -> float:
    return min(c.open, c.close) - c.low


def _is_bull(c: Candle) -> bool:
    return c.close > c.open


def _is_bear(c: Candle) -> bool:
    return c.close < c.open


def _is_hammer(recent: Sequence[Candle]) -> bool:
    last = recent[-1]
    body = _body(last)
    return _lower_shadow(last) > body * 2 and _upper_shadow(last) < body * 0.3


def _is_shooting_star(recent: Sequence[Candle]) -> bool:
    last = recent[-1]
    body = _body(last)
    return _upper_shadow(last) > body * 2 and _lower_shadow(last) < body * 0.3


def _is_doji(recent: Sequence[Candle]) -> bool:
    last = recent[-1]
    return _body(last) < _range(last) * 0.1


def _is_bullish_engulfing(recent: Sequence[Candle]) -> bool:
    prev, last = recent[-2], recent[-1]
    return (
        _is_bull(last)
        and _is_bear(prev)
        and last.close > prev.open
        and last.open < prev.close
    )


def _is_bearish_engulfing(recent: Sequence[Candle]) -> bool:
    prev, last = recent[-2], recent[-1]
    return (
        _is_bear(last)
        and _is_bull(prev)
        and last.close < prev.open
        and last.open > prev.close
    )


def _is_three_black_crows(recent: Sequence[Candle]) -> bool:
    c1, c2, c3 = recent[-3:]
    return (
        _is_bear(c1) and _is_bear(c2) and _is_bear(c3)
        and c3.close < c2.close < c1.close
    )


@dataclass(frozen=True)
class PatternRule:
    """Declarative entry of the pattern table."""

    name: str
    polarity: Polarity
    confidence: int
    description: str
    predicate: Callable[[Sequence[Candle]], bool]

    def match(self, recent: Sequence[Candle]) -> Pattern | None:
        if not self.predicate(recent):
            return None
        return Pattern(
            name=self.name,
            polarity=self.polarity,
            confidence=self.confidence,
            description=self.description,
        )


PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        "Hammer", "bullish", 75,
        "Strong bullish reversal signal",
        _is_hammer,
    ),
    PatternRule(
        "Shooting Star", "bearish", 70,
        "Bearish reversal pattern",
        _is_shooting_star,
    ),
    PatternRule(
        "Doji", "neutral", 65,
        "Market indecision, possible reversal",
        _is_doji,
    ),
    PatternRule(
        "Bullish Engulfing", "bullish", 85,
        "Strong bullish signal for a long entry",
        _is_bullish_engulfing,
    ),
    PatternRule(
        "Bearish Engulfing", "bearish", 85,
        "Strong bearish signal for a short entry",
        _is_bearish_engulfing,
    ),
    PatternRule(
        "Three Black Crows", "bearish", 80,
        "Strong bearish trend, consider a short",
        _is_three_black_crows,
    ),
)


def detect_candlestick_patterns(
    candles: Sequence[Candle],
    rules: Sequence[PatternRule] = PATTERN_RULES,
) -> list[Pattern]:
    """Detect candlestick patterns at the end of a window.

    Args:
        candles: Window of candles, oldest first.
        rules: Pattern table to evaluate (defaults to PATTERN_RULES).

    Returns:
        Every matching pattern in table order. Empty when the window has
        fewer than three candles.
    """
    if len(candles) < MIN_CANDLES:
        return []

    recent = list(candles[-TAIL_SIZE:])
    patterns = []

    for rule in rules:
        pattern = rule.match(recent)
        if pattern is not None:
            patterns.append(pattern)

    return patterns
