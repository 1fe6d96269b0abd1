"""
Optional per-token evidence records.

Each record is an independent, optional source of evidence about a token:
tokenomics, smart-money flow, social sentiment, exchange listings and
technical levels.  Any of them may be missing for a given token and the
analysis must still complete; absence is always ``None``, never a zeroed
record.

All models are frozen.  Validators only reject values that are impossible
(negative counts, percentiles outside 0–100, an inverted range); they do not
judge whether the upstream numbers are realistic.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

TrendDirection = Literal["bullish", "bearish", "neutral"]


class TokenomicsData(BaseModel):
    """Supply structure and unlock schedule.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        circulating_supply: Circulating token count.
        total_supply: Total token count.
        float_percentage: Circulating supply as percent of total supply.
        next_unlock_date: UTC date of the next scheduled unlock, if any.
        next_unlock_amount: Tokens released at the next unlock.
        next_unlock_percentage: Next unlock as percent of total supply.
        staking_apr: Staking yield in percent.
        burn_rate: Percent of supply burned per year.
        has_emission_sink: Whether the protocol has a token sink.
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    circulating_supply: float = 0.0
    total_supply: float = 0.0
    float_percentage: float = 0.0
    next_unlock_date: Optional[datetime] = None
    next_unlock_amount: float = 0.0
    next_unlock_percentage: float = 0.0
    staking_apr: float = 0.0
    burn_rate: float = 0.0
    has_emission_sink: bool = False

    @field_validator("float_percentage", "next_unlock_percentage")
    @classmethod
    def validate_percentage(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"Supply percentages must be in [0, 100], got {v}.")
        return v


class SmartMoneyFlow(BaseModel):
    """Large-holder flow proxy.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        net_inflow_24h: Net USD inflow to tracked wallets over 24h.
        net_inflow_7d: Net USD inflow over 7d.
        whale_count: Number of wallets above the whale threshold.
        average_holding_time: Mean holding period in days.
        top_wallet_concentration: Percent of supply held by the top wallets.
        smart_money_score: Upstream composite score (0–100).
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    net_inflow_24h: float = 0.0
    net_inflow_7d: float = 0.0
    whale_count: int = 0
    average_holding_time: float = 0.0
    top_wallet_concentration: float = 0.0
    smart_money_score: float = 0.0

    @field_validator("whale_count")
    @classmethod
    def validate_whale_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError("whale_count must be non-negative.")
        return v


class SentimentData(BaseModel):
    """Social engagement and sentiment snapshot.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        twitter_engagement: Raw engagement count.
        engagement_percentile: Engagement rank among tracked tokens (0–100).
        bot_score: Estimated percent of engagement from bots.
        social_score: Upstream composite social score.
        mention_volume_24h: Mentions in the last 24h.
        sentiment_score: Polarity in [0, 1]; 0.5 is neutral.
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    twitter_engagement: float = 0.0
    engagement_percentile: float = 0.0
    bot_score: float = 0.0
    social_score: float = 0.0
    mention_volume_24h: int = 0
    sentiment_score: float = 0.5

    @field_validator("engagement_percentile", "bot_score")
    @classmethod
    def validate_percentile(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"Percentile values must be in [0, 100], got {v}.")
        return v

    @field_validator("sentiment_score")
    @classmethod
    def validate_sentiment(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"sentiment_score must be in [0, 1], got {v}.")
        return v


class ListingData(BaseModel):
    """Exchange listing footprint.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        exchanges: All exchanges listing the token.
        tier1_exchanges: Subset of ``exchanges`` considered tier 1.
        liquidity_score: Liquidity proxy (30–90 when derived from volume).
        avg_spread: Average bid/ask spread in percent.
        listing_rumors: Whether an unconfirmed listing is rumored.
        expected_listings: Exchanges with an expected upcoming listing.
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    exchanges: tuple[str, ...] = ()
    tier1_exchanges: tuple[str, ...] = ()
    liquidity_score: float = 0.0
    avg_spread: float = 0.0
    listing_rumors: bool = False
    expected_listings: tuple[str, ...] = ()

    @property
    def has_tier1_listing(self) -> bool:
        return bool(self.tier1_exchanges)


class AccumulationRange(BaseModel):
    """Price band in which accumulation is assumed to happen."""

    model_config = ConfigDict(frozen=True)

    low: float
    high: float

    @model_validator(mode="after")
    def validate_bounds(self) -> "AccumulationRange":
        if self.low > self.high:
            raise ValueError(
                f"accumulation range low ({self.low}) must be <= high ({self.high})."
            )
        return self


class TechnicalAnalysis(BaseModel):
    """Upstream technical indicator snapshot.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        support: Nearest support level (USD).
        resistance: Nearest resistance level (USD).
        accumulation_range: Assumed accumulation band, if known.
        rsi: Relative strength index (0–100).
        macd: MACD histogram value.
        trend: ``"bullish"``, ``"bearish"`` or ``"neutral"``.
        breakout_probability: Upstream estimate in percent; informational only.
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    support: float = 0.0
    resistance: float = 0.0
    accumulation_range: Optional[AccumulationRange] = None
    rsi: float = 50.0
    macd: float = 0.0
    trend: TrendDirection = "neutral"
    breakout_probability: float = 0.0

    @field_validator("rsi")
    @classmethod
    def validate_rsi(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"rsi must be in [0, 100], got {v}.")
        return v
