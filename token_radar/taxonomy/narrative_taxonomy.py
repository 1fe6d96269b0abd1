"""
Narrative taxonomy: the closed set of thematic sector tags a token can carry.

A narrative is a grouping key and a scoring bonus, not a financial
classification.  Each ``NarrativeTag`` has exactly one ``NarrativeProfile``
holding its display strings and catalyst phrases.  Profiles are static lookup
data; nothing here is computed at runtime.

``NARRATIVE_PROFILES`` is the integrity contract:
  - Every ``NarrativeTag`` must have an entry.
  - Every profile must list at least one catalyst.

Run ``tests/test_taxonomy/test_narrative_taxonomy.py`` to verify this contract.

This module has NO imports from any other ``token_radar`` package.
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class NarrativeTag(StrEnum):
    """Thematic sector tag assigned by the narrative classifier."""

    AI_ML = "ai-ml"
    """AI infrastructure, GPU sharing, autonomous agents."""

    DEPIN = "depin"
    """Decentralized physical infrastructure networks and IoT."""

    GAMING = "gaming"
    """Gaming platforms, virtual worlds, NFT ecosystems."""

    DEFI = "defi"
    """Decentralized financial services and protocols."""

    RWA = "rwa"
    """Tokenized real-world assets and commodities."""


@dataclass(frozen=True)
class NarrativeProfile:
    """Display strings and catalysts for one narrative.

    Attributes:
        name:        Long display name, e.g. ``"AI & Machine Learning"``.
        short_name:  Compact label used inside signal descriptions.
        description: One-line sector description.
        catalysts:   Market developments that tend to drive the sector.
    """

    name: str
    short_name: str
    description: str
    catalysts: tuple[str, ...]


NARRATIVE_PROFILES: Mapping[NarrativeTag, NarrativeProfile] = MappingProxyType({
    NarrativeTag.AI_ML: NarrativeProfile(
        name="AI & Machine Learning",
        short_name="AI & ML",
        description="Tokens powering AI infrastructure, GPU sharing, and autonomous agents",
        catalysts=(
            "ChatGPT adoption",
            "GPU shortage",
            "AI agent development",
            "Enterprise AI adoption",
        ),
    ),
    NarrativeTag.DEPIN: NarrativeProfile(
        name="DePIN (Decentralized Physical Infrastructure)",
        short_name="DePIN",
        description="Decentralized networks for physical infrastructure and IoT",
        catalysts=(
            "5G rollout",
            "IoT expansion",
            "Data storage demand",
            "Edge computing growth",
        ),
    ),
    NarrativeTag.GAMING: NarrativeProfile(
        name="Gaming & Metaverse",
        short_name="Gaming",
        description="Gaming platforms, virtual worlds, and NFT ecosystems",
        catalysts=(
            "VR/AR adoption",
            "Play-to-earn growth",
            "Metaverse development",
            "NFT gaming",
        ),
    ),
    NarrativeTag.DEFI: NarrativeProfile(
        name="Decentralized Finance",
        short_name="DeFi",
        description="Decentralized financial services and protocols",
        catalysts=(
            "Institutional adoption",
            "Regulatory clarity",
            "Cross-chain bridges",
            "Yield farming",
        ),
    ),
    NarrativeTag.RWA: NarrativeProfile(
        name="Real World Assets",
        short_name="RWA",
        description="Tokenization of real-world assets and commodities",
        catalysts=(
            "Tokenization standards",
            "Regulatory frameworks",
            "Institutional demand",
            "Asset digitization",
        ),
    ),
})

# Narratives that get the stronger breakout thresholds.
HOT_NARRATIVES: frozenset[NarrativeTag] = frozenset({NarrativeTag.AI_ML, NarrativeTag.DEPIN})


def get_narrative_profile(tag: NarrativeTag) -> NarrativeProfile:
    """Return the static profile for ``tag`` (a ``NarrativeTag`` or its slug).

    Raises:
        ValueError: If ``tag`` is not a valid narrative slug.
    """
    return NARRATIVE_PROFILES[NarrativeTag(tag)]
