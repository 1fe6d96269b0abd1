"""Tests for token_radar/models/evidence.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from token_radar.models.evidence import (
    AccumulationRange,
    ListingData,
    SentimentData,
    SmartMoneyFlow,
    TechnicalAnalysis,
    TokenomicsData,
)


def test_tokenomics_accepts_unlock_schedule() -> None:
    t = TokenomicsData(
        token_id="fetch-ai",
        float_percentage=73.1,
        next_unlock_date=datetime(2026, 12, 1, tzinfo=timezone.utc),
        next_unlock_percentage=8.0,
    )
    assert t.next_unlock_percentage == 8.0
    assert t.next_unlock_date.year == 2026


@pytest.mark.parametrize("field", ["float_percentage", "next_unlock_percentage"])
def test_tokenomics_percentages_bounded(field: str) -> None:
    with pytest.raises(ValidationError):
        TokenomicsData(**{field: 101.0})


def test_smart_money_negative_whales_rejected() -> None:
    with pytest.raises(ValidationError):
        SmartMoneyFlow(whale_count=-3)


def test_sentiment_defaults_to_neutral() -> None:
    assert SentimentData().sentiment_score == 0.5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"engagement_percentile": 120.0},
        {"bot_score": -1.0},
        {"sentiment_score": 1.5},
    ],
)
def test_sentiment_out_of_range_rejected(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        SentimentData(**kwargs)


def test_listing_tier1_flag() -> None:
    assert ListingData(tier1_exchanges=("Binance",)).has_tier1_listing is True
    assert ListingData(exchanges=("MEXC",)).has_tier1_listing is False


def test_accumulation_range_inverted_rejected() -> None:
    with pytest.raises(ValidationError):
        AccumulationRange(low=2.0, high=1.0)


def test_technical_defaults_and_nested_range() -> None:
    ta = TechnicalAnalysis(accumulation_range={"low": 1.55, "high": 1.75})
    assert ta.rsi == 50.0
    assert ta.trend == "neutral"
    assert ta.accumulation_range == AccumulationRange(low=1.55, high=1.75)


def test_technical_bad_trend_rejected() -> None:
    with pytest.raises(ValidationError):
        TechnicalAnalysis(trend="sideways")
