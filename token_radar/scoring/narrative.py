"""
Narrative classifier: maps a token's name, description and category tags to
at most one ``NarrativeTag``.

Rules (evaluated in order, first match wins)
--------------------------------------------
    1. ai-ml  : ``artificial-intelligence`` category, OR name/description
                contains "ai", "artificial", "machine learning", "gpu", "render"
    2. depin  : ``infrastructure`` category, OR description contains
                "infrastructure", "iot", "storage", "network", "wireless"
    3. gaming : ``gaming``/``metaverse`` category, OR description contains
                "gaming", "metaverse", "nft", "virtual"
    4. defi   : ``decentralized-finance-defi`` category, OR description contains
                "defi", "lending", "yield", "liquidity"
    5. rwa    : description contains
                "real world", "tokenization", "asset", "commodity"

The order is part of the contract: a description mentioning both AI and
lending classifies as ai-ml, never defi.

All keywords are plain case-insensitive substrings. "ai" therefore also hits
words such as "chain", "blockchain" and "maintain", so most tokens whose
name or description contains one of them classify as ai-ml.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from token_radar.models.token import Token
from token_radar.taxonomy.narrative_taxonomy import NarrativeTag


@dataclass(frozen=True)
class _NarrativeRule:
    tag: NarrativeTag
    categories: frozenset[str]
    keywords: tuple[str, ...]
    match_name: bool = False


_RULES: tuple[_NarrativeRule, ...] = (
    _NarrativeRule(
        tag=NarrativeTag.AI_ML,
        categories=frozenset({"artificial-intelligence"}),
        keywords=("ai", "artificial", "machine learning", "gpu", "render"),
        match_name=True,
    ),
    _NarrativeRule(
        tag=NarrativeTag.DEPIN,
        categories=frozenset({"infrastructure"}),
        keywords=("infrastructure", "iot", "storage", "network", "wireless"),
    ),
    _NarrativeRule(
        tag=NarrativeTag.GAMING,
        categories=frozenset({"gaming", "metaverse"}),
        keywords=("gaming", "metaverse", "nft", "virtual"),
    ),
    _NarrativeRule(
        tag=NarrativeTag.DEFI,
        categories=frozenset({"decentralized-finance-defi"}),
        keywords=("defi", "lending", "yield", "liquidity"),
    ),
    _NarrativeRule(
        tag=NarrativeTag.RWA,
        categories=frozenset(),
        keywords=("real world", "tokenization", "asset", "commodity"),
    ),
)


def classify_narrative(
    token: Token,
    description: str = "",
    categories: Iterable[str] = (),
) -> Optional[NarrativeTag]:
    """Return the first matching narrative for ``token``, or ``None``.

    Args:
        token:       Token whose ``name`` is checked by the AI rule.
        description: Free-text project description (any case).
        categories:  Category slugs from the market-data feed
                     (e.g. ``"artificial-intelligence"``).

    Returns:
        A ``NarrativeTag`` or ``None`` when no rule matches.
    """
    name = token.name.lower()
    text = (description or "").lower()
    cats = {c.strip().lower() for c in categories if c}

    for rule in _RULES:
        if cats & rule.categories:
            return rule.tag
        haystacks = (name, text) if rule.match_name else (text,)
        if any(kw in hay for hay in haystacks for kw in rule.keywords):
            return rule.tag

    return None
