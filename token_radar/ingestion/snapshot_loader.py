"""
Offline market snapshot loader.

A snapshot is a JSON file holding the raw records a live fetch would have
returned, so the engine can be run and re-run without network access::

    {
      "_meta": {"source": "coingecko+github", "captured_at": "2026-10-19T09:00:00Z"},
      "tokens": [
        {
          "market":          { ...CoinGecko /coins/markets record... },
          "details":         { "description": {"en": "..."}, "categories": [...] },
          "repo":            { "stargazers_count": 1, "forks_count": 1, "pushed_at": "..." },
          "commit_activity": [ {"total": 12, "week": 1719705600}, ... ],
          "contributors":    [ {"login": "dev", "last_commit_date": "..."}, ... ],
          "tokenomics":  {...},  "smart_money": {...},  "sentiment": {...},
          "listing":     {...},  "technical":   {...}
        }
      ]
    }

Only ``market`` is required per entry.  Developer metrics are built only
when ``repo`` is present; every evidence section is optional.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from token_radar.ingestion.normalizer import (
    compute_developer_metrics,
    extract_classification_inputs,
    normalize_market_record,
)
from token_radar.models.evidence import (
    ListingData,
    SentimentData,
    SmartMoneyFlow,
    TechnicalAnalysis,
    TokenomicsData,
)
from token_radar.models.token import DeveloperMetrics, Token

logger = logging.getLogger(__name__)


class SnapshotFormatError(ValueError):
    """Raised when a snapshot file does not follow the expected layout.

    Attributes:
        path: The offending file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Malformed snapshot '{path}': {reason}")


@dataclass(frozen=True)
class TokenSnapshotEntry:
    """All normalized inputs for one token from a snapshot file."""

    token: Token
    developer_metrics: Optional[DeveloperMetrics] = None
    description: str = ""
    categories: tuple[str, ...] = ()
    tokenomics: Optional[TokenomicsData] = None
    smart_money: Optional[SmartMoneyFlow] = None
    sentiment: Optional[SentimentData] = None
    listing: Optional[ListingData] = None
    technical: Optional[TechnicalAnalysis] = None


@dataclass(frozen=True)
class MarketSnapshot:
    """A parsed snapshot file."""

    path: Path
    entries: tuple[TokenSnapshotEntry, ...]
    meta: dict[str, Any] = field(default_factory=dict)

    def find(self, token_id: str) -> Optional[TokenSnapshotEntry]:
        """Return the entry for ``token_id`` (case-insensitive id or symbol)."""
        needle = token_id.lower()
        for entry in self.entries:
            if entry.token.id.lower() == needle or entry.token.symbol.lower() == needle:
                return entry
        return None


def load_market_snapshot(
    path: Path | str,
    now:  Optional[datetime] = None,
) -> MarketSnapshot:
    """Read and normalize every token in a snapshot file.

    Args:
        path: Snapshot JSON file.
        now:  Reference time for the active-developer window (tests pin it).

    Returns:
        ``MarketSnapshot`` with one entry per token, in file order.

    Raises:
        FileNotFoundError:   If ``path`` does not exist.
        SnapshotFormatError: If the file is not UTF-8 JSON or an entry is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise SnapshotFormatError(path, f"invalid JSON ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise SnapshotFormatError(path, f"not UTF-8 text ({exc.reason})") from exc

    if not isinstance(raw, dict):
        raise SnapshotFormatError(path, "root must be a JSON object")
    tokens = raw.get("tokens")
    if not isinstance(tokens, list):
        raise SnapshotFormatError(path, "missing 'tokens' array")

    entries: list[TokenSnapshotEntry] = []
    for idx, item in enumerate(tokens):
        try:
            entries.append(_parse_entry(item, now=now))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise SnapshotFormatError(path, f"token #{idx}: {exc}") from exc

    meta = raw.get("_meta") or {}
    logger.info("Loaded %d token(s) from snapshot %s", len(entries), path)
    return MarketSnapshot(path=path, entries=tuple(entries), meta=dict(meta))


def _parse_entry(item: Any, now: Optional[datetime]) -> TokenSnapshotEntry:
    if not isinstance(item, dict):
        raise TypeError("entry must be a JSON object")
    if "market" not in item:
        raise KeyError("market")

    token = normalize_market_record(item["market"])
    description, categories = extract_classification_inputs(item.get("details") or {})

    developer_metrics = None
    if item.get("repo") is not None:
        developer_metrics = compute_developer_metrics(
            token_id=token.id,
            repo=item["repo"],
            commit_activity=item.get("commit_activity") or [],
            contributors=item.get("contributors") or [],
            now=now,
        )

    return TokenSnapshotEntry(
        token=token,
        developer_metrics=developer_metrics,
        description=description,
        categories=tuple(categories),
        tokenomics=_optional(TokenomicsData, item, "tokenomics", token.id),
        smart_money=_optional(SmartMoneyFlow, item, "smart_money", token.id),
        sentiment=_optional(SentimentData, item, "sentiment", token.id),
        listing=_optional(ListingData, item, "listing", token.id),
        technical=_optional(TechnicalAnalysis, item, "technical", token.id),
    )


def _optional(model: type, item: dict[str, Any], key: str, token_id: str):
    section = item.get(key)
    if section is None:
        return None
    return model(**{"token_id": token_id, **section})
