"""
Breakout signal engine: a weighted probability that a token is about to
break out in price, plus the itemized signals behind it.

Probability formula
-------------------
    probability = clamp(round_half_up(100 * Σ(weight * factor) / Σ weight), 5, 95)

Category weights (``CATEGORY_WEIGHTS``, total 100)
-------------------------------------------------
    volume       25   volume / market cap
    price        20   7d and 24h momentum
    development  20   commit growth + active devs (needs DeveloperMetrics)
    narrative    15   narrative heat vs 30d performance (needs a narrative)
    technical    10   market-cap tier setup
    smart_money  10   volume + 24h momentum accumulation proxy

Every category adds its full weight to Σ weight whether or not its evidence
is present and whether or not a signal fires.  Missing developer data or a
missing narrative therefore lowers the probability instead of shrinking the
denominator.  This is the opposite of the overall score in ``scorer.py``,
which drops absent categories from its maximum.

Signal tiers
------------
    volume       ratio > 0.10 strong 0.9 | > 0.05 moderate 0.6 | > 0.02 weak 0.3
    price        7d > 15 & 24h > 5 strong 0.85 | 7d > 5 & 24h > 2 moderate 0.5
                 | 7d > -5 & 24h > -2 weak 0.2
    development  growth > 50 & devs > 15 strong 0.8 | > 25 & > 8 moderate 0.5
                 | > 0 & > 3 weak 0.2
    narrative    see ``narrative_strength()``: strong 0.9 | moderate 0.6 | weak 0.3
    technical    micro-cap & ratio > 0.05 strong 0.8 | small-cap & ratio > 0.03 moderate 0.5
    smart_money  ratio > 0.10 & 24h > 3 moderate 0.6

Signals are returned sorted by descending category weight.  The sort is
stable, so equal-weight categories keep evaluation order (price before
development, technical before smart_money).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from token_radar.models.analysis import (
    MAX_BREAKOUT_PROBABILITY,
    MIN_BREAKOUT_PROBABILITY,
    BreakoutSignal,
    SignalStrength,
    SignalType,
)
from token_radar.models.token import DeveloperMetrics, Token
from token_radar.scoring.ratios import (
    market_cap_tier,
    round_half_up,
    volume_to_market_cap_ratio,
)
from token_radar.taxonomy.narrative_taxonomy import (
    HOT_NARRATIVES,
    NarrativeTag,
    get_narrative_profile,
)
from token_radar.utils.formatting import format_market_cap

CATEGORY_WEIGHTS: Mapping[SignalType, int] = MappingProxyType({
    "volume":      25,
    "price":       20,
    "development": 20,
    "narrative":   15,
    "technical":   10,
    "smart_money": 10,
})

_NARRATIVE_FACTOR: dict[SignalStrength, float] = {
    "strong":   0.9,
    "moderate": 0.6,
    "weak":     0.3,
}


@dataclass(frozen=True)
class BreakoutResult:
    """Breakout probability and its contributing signals.

    Attributes:
        probability:    Integer percent in [5, 95].
        signals:        Signals sorted by descending category weight.
        weighted_score: Σ(weight * factor) before normalization.
        total_weight:   Σ weight over all categories (always 100).
    """

    probability: int
    signals: tuple[BreakoutSignal, ...]
    weighted_score: float
    total_weight: int


@dataclass
class _Accumulator:
    signals: list[BreakoutSignal]
    weighted_score: float = 0.0
    total_weight: int = 0

    def add_category(self, category: SignalType) -> int:
        weight = CATEGORY_WEIGHTS[category]
        self.total_weight += weight
        return weight

    def emit(
        self,
        category:    SignalType,
        strength:    SignalStrength,
        factor:      float,
        description: str,
    ) -> None:
        weight = CATEGORY_WEIGHTS[category]
        self.signals.append(
            BreakoutSignal(type=category, strength=strength, description=description, weight=weight)
        )
        self.weighted_score += weight * factor


def compute_breakout(
    token:             Token,
    developer_metrics: Optional[DeveloperMetrics] = None,
    narrative:         Optional[NarrativeTag] = None,
) -> BreakoutResult:
    """Compute the breakout probability and signals for one token.

    Args:
        token:             Normalized market snapshot.
        developer_metrics: Repository activity, or ``None``.
        narrative:         Classified narrative, or ``None``.

    Returns:
        ``BreakoutResult`` with probability clamped to [5, 95].

    Raises:
        InvalidInputError: If ``token.market_cap <= 0``.
    """
    ratio = volume_to_market_cap_ratio(token)
    acc = _Accumulator(signals=[])

    _volume_signal(acc, ratio)
    _price_signal(acc, token.price_change_7d, token.price_change_24h)
    _development_signal(acc, developer_metrics)
    _narrative_signal(acc, narrative, token.price_change_30d)
    _technical_signal(acc, token.market_cap, ratio)
    _smart_money_signal(acc, ratio, token.price_change_24h)

    raw = round_half_up(100.0 * acc.weighted_score / acc.total_weight)
    probability = max(MIN_BREAKOUT_PROBABILITY, min(MAX_BREAKOUT_PROBABILITY, raw))
    ordered = sorted(acc.signals, key=lambda s: -s.weight)

    return BreakoutResult(
        probability=probability,
        signals=tuple(ordered),
        weighted_score=round(acc.weighted_score, 6),
        total_weight=acc.total_weight,
    )


def narrative_strength(narrative: NarrativeTag, change_30d: float) -> SignalStrength:
    """Grade a narrative's heat from the token's 30d performance.

    Rules (first match wins):
        strong   : hot narrative (ai-ml, depin) and 30d > 100%
        moderate : hot narrative and 30d > 30%, OR any narrative and 30d > 50%
        weak     : everything else
    """
    is_hot = NarrativeTag(narrative) in HOT_NARRATIVES
    if is_hot and change_30d > 100:
        return "strong"
    if is_hot and change_30d > 30:
        return "moderate"
    if change_30d > 50:
        return "moderate"
    return "weak"


# ── Category evaluators ───────────────────────────────────────────────────────

def _volume_signal(acc: _Accumulator, ratio: float) -> None:
    acc.add_category("volume")
    pct = ratio * 100
    if ratio > 0.10:
        acc.emit("volume", "strong", 0.9,
                 f"Exceptional volume: {pct:.1f}% of market cap (breakout signal)")
    elif ratio > 0.05:
        acc.emit("volume", "moderate", 0.6,
                 f"High volume: {pct:.1f}% of market cap (accumulation)")
    elif ratio > 0.02:
        acc.emit("volume", "weak", 0.3,
                 f"Moderate volume: {pct:.1f}% of market cap (watching)")


def _price_signal(acc: _Accumulator, change_7d: float, change_24h: float) -> None:
    acc.add_category("price")
    if change_7d > 15 and change_24h > 5:
        acc.emit("price", "strong", 0.85,
                 f"Strong momentum: {change_7d:+.1f}% (7d), {change_24h:+.1f}% (24h)")
    elif change_7d > 5 and change_24h > 2:
        acc.emit("price", "moderate", 0.5,
                 f"Building momentum: {change_7d:+.1f}% (7d), {change_24h:+.1f}% (24h)")
    elif change_7d > -5 and change_24h > -2:
        acc.emit("price", "weak", 0.2,
                 f"Stable price action: {change_7d:+.1f}% (7d), {change_24h:+.1f}% (24h)")


def _development_signal(acc: _Accumulator, metrics: Optional[DeveloperMetrics]) -> None:
    acc.add_category("development")
    if metrics is None:
        return
    growth = metrics.commit_growth_6m
    devs = metrics.monthly_active_devs
    detail = f"{growth:+.1f}% commits, {devs} active devs"
    if growth > 50 and devs > 15:
        acc.emit("development", "strong", 0.8, f"High dev activity: {detail}")
    elif growth > 25 and devs > 8:
        acc.emit("development", "moderate", 0.5, f"Growing dev activity: {detail}")
    elif growth > 0 and devs > 3:
        acc.emit("development", "weak", 0.2, f"Stable dev activity: {detail}")


def _narrative_signal(
    acc:        _Accumulator,
    narrative:  Optional[NarrativeTag],
    change_30d: float,
) -> None:
    acc.add_category("narrative")
    if narrative is None:
        return
    strength = narrative_strength(narrative, change_30d)
    label = get_narrative_profile(narrative).short_name
    if strength == "strong":
        description = f"Hot narrative: {label} ({change_30d:+.1f}% sector)"
    elif strength == "moderate":
        description = f"Growing narrative: {label}"
    else:
        description = f"Established narrative: {label}"
    acc.emit("narrative", strength, _NARRATIVE_FACTOR[strength], description)


def _technical_signal(acc: _Accumulator, market_cap: float, ratio: float) -> None:
    acc.add_category("technical")
    tier = market_cap_tier(market_cap)
    if tier == "micro" and ratio > 0.05:
        acc.emit("technical", "strong", 0.8,
                 f"Micro-cap breakout setup: {format_market_cap(market_cap)} "
                 f"with {ratio * 100:.1f}% volume ratio")
    elif tier == "small" and ratio > 0.03:
        acc.emit("technical", "moderate", 0.5,
                 f"Small-cap with momentum: {format_market_cap(market_cap)} showing volume")


def _smart_money_signal(acc: _Accumulator, ratio: float, change_24h: float) -> None:
    acc.add_category("smart_money")
    # Heuristic only: volume surge plus positive 24h move, not wallet tracking.
    if ratio > 0.10 and change_24h > 3:
        acc.emit("smart_money", "moderate", 0.6,
                 "Potential smart money accumulation detected")
