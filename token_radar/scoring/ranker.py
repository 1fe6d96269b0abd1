"""
Breakout candidate ranker: shortlists analysis results by breakout
probability.

    1. keep results with breakout_probability >= min_probability (default 60)
    2. sort by breakout_probability descending (stable for ties)
    3. return at most ``limit`` results (default 10)

Pure filter + sort; the input list is not modified.
"""

from __future__ import annotations

from typing import Iterable

from token_radar.models.analysis import AnalysisResult

DEFAULT_MIN_PROBABILITY = 60
DEFAULT_CANDIDATE_LIMIT = 10


def rank_breakout_candidates(
    results:         Iterable[AnalysisResult],
    min_probability: int = DEFAULT_MIN_PROBABILITY,
    limit:           int = DEFAULT_CANDIDATE_LIMIT,
) -> list[AnalysisResult]:
    """Return the breakout shortlist.

    Args:
        results:         Already-analyzed tokens.
        min_probability: Inclusive probability threshold.
        limit:           Maximum shortlist length; ``0`` yields an empty list.

    Returns:
        Results sorted by ``breakout_probability`` descending.
    """
    eligible = [r for r in results if r.breakout_probability >= min_probability]
    eligible.sort(key=lambda r: r.breakout_probability, reverse=True)
    return eligible[:max(limit, 0)]
