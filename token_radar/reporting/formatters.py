"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept engine outputs and return plain multi-line strings
suitable for ``typer.echo()``.  No third-party dependencies.
"""

from __future__ import annotations

from typing import Optional

from token_radar.models.analysis import AnalysisResult
from token_radar.scoring.engagement import EngagementAssessment
from token_radar.scoring.ratios import float_percentage, listing_liquidity_score
from token_radar.scoring.scorer import (
    MAX_DEVELOPER_ACTIVITY,
    MAX_MARKET_CAP_TIER,
    MAX_MARKET_PERFORMANCE,
    MAX_NARRATIVE_BONUS,
    MAX_VOLUME_RATIO,
    ScoreBreakdown,
)
from token_radar.utils.formatting import format_market_cap, format_percentage

_STRENGTH_MARK = {"strong": "+++", "moderate": "++ ", "weak": "+  "}


# ── Score table ───────────────────────────────────────────────────────────────


def format_analysis_table(results: list[AnalysisResult], source: str = "") -> str:
    """Format every analyzed token as one row, sorted by score descending.

    Example::

        Symbol  Name                  Mkt Cap     30d  Narrative  Score  Risk    Rec.        Brk%
        ------------------------------------------------------------------------------------------
        RNDR    Render                  $3.9B  +410.5%  ai-ml         85  low     strong_buy    56
    """
    lines: list[str] = ["", "=== Token Analysis ==="]
    if source:
        lines.append(f"  Source: {source}")

    if not results:
        lines.append("")
        lines.append("  (no tokens analyzed)")
        return "\n".join(lines)

    header = (
        f"  {'Symbol':<7} {'Name':<20} {'Mkt Cap':>9} {'30d':>9}  "
        f"{'Narrative':<9} {'Score':>5}  {'Risk':<6} {'Rec.':<11} {'Brk%':>4}"
    )
    lines.append("")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    ordered = sorted(results, key=lambda r: (-r.overall_score, r.token.id))
    for r in ordered:
        t = r.token
        narrative = r.narrative.tag.value if r.narrative else "-"
        lines.append(
            f"  {t.symbol[:7]:<7} {t.name[:20]:<20} {format_market_cap(t.market_cap):>9} "
            f"{format_percentage(t.price_change_30d, 1):>9}  {narrative:<9} "
            f"{r.overall_score:>5}  {r.risk_level:<6} {r.recommendation:<11} "
            f"{r.breakout_probability:>4}"
        )
    return "\n".join(lines)


# ── Breakout shortlist ────────────────────────────────────────────────────────


def format_breakout_candidates(
    candidates:      list[AnalysisResult],
    min_probability: int,
) -> str:
    """Format the ranked breakout shortlist with each candidate's signals."""
    lines: list[str] = ["", "=== Breakout Candidates ==="]
    lines.append(f"  Threshold: >= {min_probability}% breakout probability")

    if not candidates:
        lines.append("")
        lines.append("  (no tokens meet the breakout threshold)")
        return "\n".join(lines)

    for rank, r in enumerate(candidates, start=1):
        t = r.token
        lines.append("")
        lines.append(
            f"  {rank:>2}. {t.symbol} ({t.name})  {r.breakout_probability}%  "
            f"score={r.overall_score}  {format_market_cap(t.market_cap)}"
        )
        for s in r.signals:
            lines.append(f"      [{_STRENGTH_MARK[s.strength]}] {s.type:<11} {s.description}")
    return "\n".join(lines)


# ── Single token detail ───────────────────────────────────────────────────────


def format_token_detail(
    result:       AnalysisResult,
    breakdown:    ScoreBreakdown,
    engagement:   Optional[EngagementAssessment] = None,
    unlock_risky: Optional[bool] = None,
) -> str:
    """Format a detailed single-token report.

    Sections: market snapshot (float, volume-derived liquidity, listings),
    score breakdown, breakout signals, narrative,
    and (when the evidence exists) engagement and unlock risk.
    """
    t = result.token
    lines: list[str] = ["", f"=== {t.name} ({t.symbol}) ==="]
    lines.append(f"  Price:       ${t.price:,.4f}")
    lines.append(f"  Market cap:  {format_market_cap(t.market_cap)}")
    lines.append(f"  Volume 24h:  {format_market_cap(t.volume_24h)}")
    lines.append(
        f"  Change:      24h {format_percentage(t.price_change_24h)}  "
        f"7d {format_percentage(t.price_change_7d)}  "
        f"30d {format_percentage(t.price_change_30d)}"
    )
    if t.total_supply > 0:
        lines.append(
            f"  Float:       {float_percentage(t.circulating_supply, t.total_supply):.1f}% "
            "of total supply"
        )
    lines.append(f"  Liquidity:   {listing_liquidity_score(t):.0f}/90 (volume-derived)")
    if result.listing is not None and result.listing.exchanges:
        tier1 = ", ".join(result.listing.tier1_exchanges) or "none"
        lines.append(
            f"  Listings:    {len(result.listing.exchanges)} exchange(s), tier 1: {tier1}"
        )

    lines.append("")
    lines.append(
        f"  Overall score: {result.overall_score}/100  "
        f"({breakdown.achieved}/{breakdown.maximum} pts)  "
        f"risk={result.risk_level}  -> {result.recommendation}"
    )
    lines.append(_breakdown_row("Market performance", breakdown.market_performance, MAX_MARKET_PERFORMANCE))
    lines.append(_breakdown_row("Volume / market cap", breakdown.volume_ratio, MAX_VOLUME_RATIO))
    lines.append(_breakdown_row("Developer activity", breakdown.developer_activity, MAX_DEVELOPER_ACTIVITY))
    lines.append(_breakdown_row("Narrative bonus", breakdown.narrative_bonus, MAX_NARRATIVE_BONUS))
    lines.append(_breakdown_row("Market-cap tier", breakdown.market_cap_tier, MAX_MARKET_CAP_TIER))

    lines.append("")
    lines.append(f"  Breakout probability: {result.breakout_probability}%")
    if result.signals:
        for s in result.signals:
            lines.append(f"    [{_STRENGTH_MARK[s.strength]}] {s.type:<11} {s.description}")
    else:
        lines.append("    (no breakout signals)")

    if result.narrative is not None:
        n = result.narrative
        lines.append("")
        lines.append(f"  Narrative: {n.name}{'  [TRENDING]' if n.trending else ''}")
        lines.append(f"    {n.description}")
        lines.append(f"    Catalysts: {', '.join(n.catalysts)}")

    if engagement is not None:
        lines.append("")
        lines.append(
            f"  Engagement: {engagement.sweet_spot_score}/100"
            f"{'  [SWEET SPOT]' if engagement.is_in_sweet_spot else ''}"
        )
        lines.append(f"    {engagement.recommendation}")

    if unlock_risky is not None:
        lines.append("")
        lines.append(
            "  Unlock risk: [WARN] >5% of supply unlocks within 6 months"
            if unlock_risky else "  Unlock risk: none within 6 months"
        )

    return "\n".join(lines)


def _breakdown_row(label: str, points: Optional[int], maximum: int) -> str:
    if points is None:
        return f"    {label:<20} {'n/a':>7}  (no data, excluded)"
    return f"    {label:<20} {points:>3}/{maximum:<3}"
