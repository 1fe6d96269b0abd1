"""
Token analyzer: composes the classifier, scorer and breakout engine into a
single ``AnalysisResult`` per token.

Usage flow
----------
1. analyze_token(token, developer_metrics, description, categories, ...)
   -> AnalysisResult

2. analyze_snapshot(entries)
   -> list[AnalysisResult]  (tokens with unusable market data are skipped)

3. rank_breakout_candidates(results)  (see ``ranker.py``)
   -> shortlist
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from token_radar.ingestion.snapshot_loader import TokenSnapshotEntry
from token_radar.models.analysis import AnalysisResult, NarrativeData
from token_radar.models.evidence import (
    ListingData,
    SentimentData,
    SmartMoneyFlow,
    TechnicalAnalysis,
    TokenomicsData,
)
from token_radar.models.token import DeveloperMetrics, Token
from token_radar.scoring.breakout import compute_breakout
from token_radar.scoring.narrative import classify_narrative
from token_radar.scoring.ratios import InvalidInputError
from token_radar.scoring.scorer import compute_score, derive_risk_and_recommendation
from token_radar.taxonomy.narrative_taxonomy import NarrativeTag, get_narrative_profile

logger = logging.getLogger(__name__)

# 30d change above which a narrative is flagged as trending.
_TRENDING_CHANGE_30D = 50.0


def build_narrative_data(tag: NarrativeTag, token: Token) -> NarrativeData:
    """Combine the static narrative profile with the token's market data."""
    profile = get_narrative_profile(tag)
    return NarrativeData(
        tag=tag,
        name=profile.name,
        description=profile.description,
        tokens=(token.id,),
        performance_30d=token.price_change_30d,
        market_cap=token.market_cap,
        trending=token.price_change_30d > _TRENDING_CHANGE_30D,
        catalysts=profile.catalysts,
    )


def analyze_token(
    token:             Token,
    developer_metrics: Optional[DeveloperMetrics] = None,
    description:       str = "",
    categories:        Iterable[str] = (),
    tokenomics:        Optional[TokenomicsData] = None,
    smart_money:       Optional[SmartMoneyFlow] = None,
    sentiment:         Optional[SentimentData] = None,
    listing:           Optional[ListingData] = None,
    technical:         Optional[TechnicalAnalysis] = None,
) -> AnalysisResult:
    """Run the full engine for one token.

    Raises:
        InvalidInputError: If ``token.market_cap <= 0``.
    """
    narrative = classify_narrative(token, description, categories)
    score = compute_score(token, developer_metrics, narrative)
    risk_level, recommendation = derive_risk_and_recommendation(score, token)
    breakout = compute_breakout(token, developer_metrics, narrative)

    return AnalysisResult(
        token=token,
        narrative=build_narrative_data(narrative, token) if narrative is not None else None,
        developer_metrics=developer_metrics,
        tokenomics=tokenomics,
        smart_money=smart_money,
        sentiment=sentiment,
        listing=listing,
        technical=technical,
        overall_score=score,
        risk_level=risk_level,
        recommendation=recommendation,
        breakout_probability=breakout.probability,
        signals=breakout.signals,
    )


def analyze_entry(entry: TokenSnapshotEntry) -> AnalysisResult:
    """``analyze_token`` over a loaded snapshot entry."""
    return analyze_token(
        token=entry.token,
        developer_metrics=entry.developer_metrics,
        description=entry.description,
        categories=entry.categories,
        tokenomics=entry.tokenomics,
        smart_money=entry.smart_money,
        sentiment=entry.sentiment,
        listing=entry.listing,
        technical=entry.technical,
    )


def analyze_snapshot(entries: Iterable[TokenSnapshotEntry]) -> list[AnalysisResult]:
    """Analyze a batch of snapshot entries.

    Entries whose market data cannot be scored (``InvalidInputError``) are
    skipped with a warning; every other error propagates.

    Returns:
        Results in input order.
    """
    results: list[AnalysisResult] = []
    skipped = 0
    for entry in entries:
        try:
            results.append(analyze_entry(entry))
        except InvalidInputError as exc:
            skipped += 1
            logger.warning(
                "Skipping token %s: %s", entry.token.id, exc,
                extra={"token_id": entry.token.id},
            )
    logger.info("Analyzed %d token(s), skipped %d", len(results), skipped)
    return results
