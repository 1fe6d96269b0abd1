"""Tests for token_radar/scoring/engagement.py."""

from __future__ import annotations

import pytest

from token_radar.models.evidence import SentimentData
from token_radar.scoring.engagement import assess_engagement, assess_sentiment
from token_radar.scoring.ratios import InvalidInputError


def test_perfect_sweet_spot() -> None:
    a = assess_engagement(70, 10, 0.7)
    assert a.is_in_sweet_spot is True
    assert a.sweet_spot_score == 100
    assert a.recommendation.startswith("Perfect sweet spot")


@pytest.mark.parametrize("percentile", [60, 80])
def test_band_edges_inclusive(percentile: float) -> None:
    assert assess_engagement(percentile, 14.9, 0.41).is_in_sweet_spot is True


def test_hype_warning_above_band() -> None:
    a = assess_engagement(85, 10, 0.7)
    assert a.is_in_sweet_spot is False
    assert a.sweet_spot_score == 80
    assert a.recommendation.startswith("High engagement")


def test_low_engagement() -> None:
    a = assess_engagement(40, 5, 0.7)
    assert a.sweet_spot_score == 60
    assert a.recommendation.startswith("Low engagement")


def test_bot_warning() -> None:
    a = assess_engagement(70, 20, 0.7)
    assert a.is_in_sweet_spot is False
    assert a.sweet_spot_score == 85
    assert a.recommendation.startswith("High bot activity")


def test_mixed_signals_on_negative_sentiment() -> None:
    a = assess_engagement(70, 10, 0.3)
    assert a.is_in_sweet_spot is False
    assert a.sweet_spot_score == 70
    assert a.recommendation.startswith("Mixed signals")


def test_hype_takes_priority_over_bots() -> None:
    assert assess_engagement(95, 60, 0.2).recommendation.startswith("High engagement")


@pytest.mark.parametrize(
    "args", [(101, 10, 0.5), (-1, 10, 0.5), (70, 120, 0.5), (70, 10, 1.2), (70, 10, -0.1)]
)
def test_out_of_range_raises(args: tuple) -> None:
    with pytest.raises(InvalidInputError):
        assess_engagement(*args)


def test_assess_sentiment_wraps_record() -> None:
    sentiment = SentimentData(engagement_percentile=72, bot_score=9, sentiment_score=0.71)
    assert assess_sentiment(sentiment) == assess_engagement(72, 9, 0.71)
