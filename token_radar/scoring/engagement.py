"""
Social engagement "sweet spot" assessment.

The sweet spot is the 60th–80th engagement percentile with low bot activity
and non-negative sentiment: enough interest to matter, not yet the
hype-driven or bot-inflated top of the distribution.

Score (0–100)
-------------
    engagement percentile in [60, 80]      +40   (in [50, 90) → +20)
    bot score < 15                         +30   (< 25 → +15)
    sentiment score > 0.6                  +30   (> 0.4 → +15)

Recommendation text (priority order — first match wins)
-------------------------------------------------------
    1. in sweet spot
    2. percentile > 80   → hype warning
    3. percentile < 60   → low engagement
    4. bot score >= 15   → bot warning
    5. mixed signals
"""

from __future__ import annotations

from dataclasses import dataclass

from token_radar.models.evidence import SentimentData
from token_radar.scoring.ratios import InvalidInputError


@dataclass(frozen=True)
class EngagementAssessment:
    """Outcome of a sweet-spot check.

    Attributes:
        is_in_sweet_spot: All four sweet-spot conditions hold.
        sweet_spot_score: 0–100 composite.
        recommendation:   Human-readable guidance.
    """

    is_in_sweet_spot: bool
    sweet_spot_score: int
    recommendation: str


def assess_engagement(
    engagement_percentile: float,
    bot_score:             float,
    sentiment_score:       float,
) -> EngagementAssessment:
    """Grade social engagement against the sweet-spot band.

    Args:
        engagement_percentile: 0–100 engagement rank.
        bot_score:             0–100 estimated bot share.
        sentiment_score:       0–1 polarity; 0.5 is neutral.

    Raises:
        InvalidInputError: If any input is outside its range.
    """
    if not 0.0 <= engagement_percentile <= 100.0:
        raise InvalidInputError("engagement_percentile", engagement_percentile, "must be in [0, 100]")
    if not 0.0 <= bot_score <= 100.0:
        raise InvalidInputError("bot_score", bot_score, "must be in [0, 100]")
    if not 0.0 <= sentiment_score <= 1.0:
        raise InvalidInputError("sentiment_score", sentiment_score, "must be in [0, 1]")

    in_band = 60 <= engagement_percentile <= 80
    is_in_sweet_spot = in_band and bot_score < 15 and sentiment_score > 0.4

    score = 0
    if in_band:
        score += 40
    elif 50 <= engagement_percentile < 90:
        score += 20

    if bot_score < 15:
        score += 30
    elif bot_score < 25:
        score += 15

    if sentiment_score > 0.6:
        score += 30
    elif sentiment_score > 0.4:
        score += 15

    if is_in_sweet_spot:
        recommendation = (
            "Perfect sweet spot - high interest without excessive hype or bot manipulation"
        )
    elif engagement_percentile > 80:
        recommendation = (
            "High engagement - monitor for excessive hype and potential top signals"
        )
    elif engagement_percentile < 60:
        recommendation = "Low engagement - early stage or lacking momentum"
    elif bot_score >= 15:
        recommendation = "High bot activity detected - be cautious of artificial engagement"
    else:
        recommendation = "Mixed signals - requires deeper analysis"

    return EngagementAssessment(
        is_in_sweet_spot=is_in_sweet_spot,
        sweet_spot_score=score,
        recommendation=recommendation,
    )


def assess_sentiment(sentiment: SentimentData) -> EngagementAssessment:
    """Convenience wrapper over ``assess_engagement`` for a ``SentimentData``."""
    return assess_engagement(
        engagement_percentile=sentiment.engagement_percentile,
        bot_score=sentiment.bot_score,
        sentiment_score=sentiment.sentiment_score,
    )
