"""
Engine output models: breakout signals, narrative view and the per-token
``AnalysisResult``.

``AnalysisResult`` aggregates the token, every optional evidence record and
the engine outputs.  Its validators enforce the output invariants
(``overall_score`` in [0, 100], ``breakout_probability`` in [5, 95]) so a
result that reaches the ranker or a report is always well-formed.

All models are frozen; a result is a value, recomputed on every request.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from token_radar.models.evidence import (
    ListingData,
    SentimentData,
    SmartMoneyFlow,
    TechnicalAnalysis,
    TokenomicsData,
)
from token_radar.models.token import DeveloperMetrics, Token
from token_radar.taxonomy.narrative_taxonomy import NarrativeTag

SignalType = Literal["volume", "price", "development", "narrative", "smart_money", "technical"]
SignalStrength = Literal["weak", "moderate", "strong"]
RiskLevel = Literal["low", "medium", "high"]
Recommendation = Literal["strong_buy", "buy", "hold", "sell", "strong_sell"]

VALID_RECOMMENDATIONS: tuple[str, ...] = ("strong_buy", "buy", "hold", "sell", "strong_sell")

MIN_BREAKOUT_PROBABILITY = 5
MAX_BREAKOUT_PROBABILITY = 95


class BreakoutSignal(BaseModel):
    """One itemized contributor to a breakout probability.

    Attributes:
        type: Signal category.
        strength: ``"weak"``, ``"moderate"`` or ``"strong"``.
        description: Human-readable explanation.
        weight: The category's weight; used for ordering, not displayed.
    """

    model_config = ConfigDict(frozen=True)

    type: SignalType
    strength: SignalStrength
    description: str
    weight: int

    @field_validator("description")
    @classmethod
    def validate_description_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Signal description must not be empty.")
        return v


class NarrativeData(BaseModel):
    """Narrative view attached to an analysis result.

    Built from the static narrative profile plus the token's own market data.
    """

    model_config = ConfigDict(frozen=True)

    tag: NarrativeTag
    name: str
    description: str
    tokens: tuple[str, ...] = ()
    performance_30d: float = 0.0
    market_cap: float = 0.0
    trending: bool = False
    catalysts: tuple[str, ...] = ()


class AnalysisResult(BaseModel):
    """Complete engine output for one token.

    Attributes:
        token: The analyzed market snapshot.
        narrative: Narrative view, or ``None`` when no narrative matched.
        developer_metrics: Repository activity, or ``None``.
        tokenomics: Supply/unlock evidence, or ``None``.
        smart_money: Large-holder flow evidence, or ``None``.
        sentiment: Social evidence, or ``None``.
        listing: Exchange listing evidence, or ``None``.
        technical: Technical indicator evidence, or ``None``.
        overall_score: Composite investment score in [0, 100].
        risk_level: ``"low"``, ``"medium"`` or ``"high"``.
        recommendation: One of ``VALID_RECOMMENDATIONS``.
        breakout_probability: Weighted breakout probability in [5, 95].
        signals: Breakout signals, ordered by descending category weight.
    """

    model_config = ConfigDict(frozen=True)

    token: Token
    narrative: Optional[NarrativeData] = None
    developer_metrics: Optional[DeveloperMetrics] = None
    tokenomics: Optional[TokenomicsData] = None
    smart_money: Optional[SmartMoneyFlow] = None
    sentiment: Optional[SentimentData] = None
    listing: Optional[ListingData] = None
    technical: Optional[TechnicalAnalysis] = None
    overall_score: int
    risk_level: RiskLevel
    recommendation: Recommendation
    breakout_probability: int
    signals: tuple[BreakoutSignal, ...] = ()

    @field_validator("overall_score")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"overall_score must be in [0, 100], got {v}.")
        return v

    @field_validator("breakout_probability")
    @classmethod
    def validate_probability_range(cls, v: int) -> int:
        if not MIN_BREAKOUT_PROBABILITY <= v <= MAX_BREAKOUT_PROBABILITY:
            raise ValueError(
                f"breakout_probability must be in "
                f"[{MIN_BREAKOUT_PROBABILITY}, {MAX_BREAKOUT_PROBABILITY}], got {v}."
            )
        return v
