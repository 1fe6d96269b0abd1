"""
Overall investment score: reduces a token's market data, optional developer
metrics and optional narrative to an integer in [0, 100].

Point budget (each category scored independently)
-------------------------------------------------
    market performance   max 30   always applicable
    volume / market cap  max 20   always applicable
    developer activity   max 25   only when DeveloperMetrics is present
    narrative bonus      max 15   only when a narrative is present
    market-cap tier      max 10   always applicable

    score = round_half_up(100 * achieved / applicable_maximum)

A category whose evidence is absent contributes to neither the achieved
points nor the maximum, so a token without repository data is scored out of
75 rather than punished with a zero out of 100.

Component thresholds
--------------------
market performance (30d change, percent):
    > 100 → 30,  > 50 → 20,  > 0 → 10,  else 0
volume / market cap ratio:
    > 0.10 → 20, > 0.05 → 15, > 0.01 → 10, else 0
developer activity (sum of two parts):
    commit growth 6m:     > 50 → 15, > 25 → 10, > 0 → 5
    monthly active devs:  > 20 → 10, > 10 → 7,  > 5 → 5
narrative bonus:
    ai-ml → 15, depin → 12, gaming → 10, any other → 8
market-cap tier (USD):
    > 1B → 10, > 100M → 8, > 10M → 6, > 1M → 4, else 0

Risk and recommendation (priority order — first match wins)
-----------------------------------------------------------
    risk:            low    : score >= 75 AND market cap > $100M
                     medium : score >= 60 AND market cap > $10M
                     high   : everything else
    recommendation:  strong_buy : score >= 80 AND risk == low
                     buy        : score >= 70
                     hold       : score >= 50
                     sell       : score >= 30
                     strong_sell: everything else
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from token_radar.models.analysis import Recommendation, RiskLevel
from token_radar.models.token import DeveloperMetrics, Token
from token_radar.scoring.ratios import round_half_up, volume_to_market_cap_ratio
from token_radar.taxonomy.narrative_taxonomy import NarrativeTag

MAX_MARKET_PERFORMANCE = 30
MAX_VOLUME_RATIO = 20
MAX_DEVELOPER_ACTIVITY = 25
MAX_NARRATIVE_BONUS = 15
MAX_MARKET_CAP_TIER = 10

_NARRATIVE_BONUS: dict[NarrativeTag, int] = {
    NarrativeTag.AI_ML:  15,
    NarrativeTag.DEPIN:  12,
    NarrativeTag.GAMING: 10,
}
_DEFAULT_NARRATIVE_BONUS = 8


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-category points behind an overall score.

    Optional categories are ``None`` when their evidence was absent, which
    also removes their maximum from the denominator.

    Attributes:
        market_performance:  0–30 points from the 30d price change.
        volume_ratio:        0–20 points from volume / market cap.
        developer_activity:  0–25 points, or ``None`` without metrics.
        narrative_bonus:     0–15 points, or ``None`` without a narrative.
        market_cap_tier:     0–10 points from market-cap size.
    """

    market_performance: int
    volume_ratio: int
    developer_activity: Optional[int]
    narrative_bonus: Optional[int]
    market_cap_tier: int

    @property
    def achieved(self) -> int:
        return (
            self.market_performance
            + self.volume_ratio
            + (self.developer_activity or 0)
            + (self.narrative_bonus or 0)
            + self.market_cap_tier
        )

    @property
    def maximum(self) -> int:
        """Sum of the maxima of every applicable category."""
        total = MAX_MARKET_PERFORMANCE + MAX_VOLUME_RATIO + MAX_MARKET_CAP_TIER
        if self.developer_activity is not None:
            total += MAX_DEVELOPER_ACTIVITY
        if self.narrative_bonus is not None:
            total += MAX_NARRATIVE_BONUS
        return total

    @property
    def total(self) -> int:
        """Normalized overall score in [0, 100]."""
        return round_half_up(100.0 * self.achieved / self.maximum)


def compute_score_breakdown(
    token:             Token,
    developer_metrics: Optional[DeveloperMetrics] = None,
    narrative:         Optional[NarrativeTag] = None,
) -> ScoreBreakdown:
    """Score every category for one token.

    Raises:
        InvalidInputError: If ``token.market_cap <= 0``.
    """
    ratio = volume_to_market_cap_ratio(token)

    return ScoreBreakdown(
        market_performance=_market_performance_points(token.price_change_30d),
        volume_ratio=_volume_ratio_points(ratio),
        developer_activity=(
            _developer_points(developer_metrics) if developer_metrics is not None else None
        ),
        narrative_bonus=(
            _NARRATIVE_BONUS.get(NarrativeTag(narrative), _DEFAULT_NARRATIVE_BONUS)
            if narrative is not None else None
        ),
        market_cap_tier=_market_cap_points(token.market_cap),
    )


def compute_score(
    token:             Token,
    developer_metrics: Optional[DeveloperMetrics] = None,
    narrative:         Optional[NarrativeTag] = None,
) -> int:
    """Return the overall investment score (0–100) for one token.

    Args:
        token:             Normalized market snapshot.
        developer_metrics: Repository activity, or ``None`` if unavailable.
        narrative:         Classified narrative, or ``None``.

    Returns:
        Integer score in [0, 100].

    Raises:
        InvalidInputError: If ``token.market_cap <= 0``.
    """
    return compute_score_breakdown(token, developer_metrics, narrative).total


def determine_risk_level(score: int, market_cap: float) -> RiskLevel:
    """Map (score, market cap) to a risk tier.  First match wins."""
    if score >= 75 and market_cap > 100_000_000:
        return "low"
    if score >= 60 and market_cap > 10_000_000:
        return "medium"
    return "high"


def determine_recommendation(score: int, risk_level: RiskLevel) -> Recommendation:
    """Map (score, risk tier) to a recommendation.  First match wins."""
    if score >= 80 and risk_level == "low":
        return "strong_buy"
    if score >= 70:
        return "buy"
    if score >= 50:
        return "hold"
    if score >= 30:
        return "sell"
    return "strong_sell"


def derive_risk_and_recommendation(
    score: int,
    token: Token,
) -> tuple[RiskLevel, Recommendation]:
    """Return ``(risk_level, recommendation)`` for a scored token."""
    risk = determine_risk_level(score, token.market_cap)
    return risk, determine_recommendation(score, risk)


# ── Category helpers ──────────────────────────────────────────────────────────

def _market_performance_points(change_30d: float) -> int:
    if change_30d > 100:
        return 30
    if change_30d > 50:
        return 20
    if change_30d > 0:
        return 10
    return 0


def _volume_ratio_points(ratio: float) -> int:
    if ratio > 0.10:
        return 20
    if ratio > 0.05:
        return 15
    if ratio > 0.01:
        return 10
    return 0


def _developer_points(metrics: DeveloperMetrics) -> int:
    growth = metrics.commit_growth_6m
    if growth > 50:
        points = 15
    elif growth > 25:
        points = 10
    elif growth > 0:
        points = 5
    else:
        points = 0

    devs = metrics.monthly_active_devs
    if devs > 20:
        points += 10
    elif devs > 10:
        points += 7
    elif devs > 5:
        points += 5
    return points


def _market_cap_points(market_cap: float) -> int:
    if market_cap > 1_000_000_000:
        return 10
    if market_cap > 100_000_000:
        return 8
    if market_cap > 10_000_000:
        return 6
    if market_cap > 1_000_000:
        return 4
    return 0
