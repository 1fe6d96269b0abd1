"""
Metric normalizer: converts raw market-data and repository records into the
engine's ``Token`` and ``DeveloperMetrics`` models.

Raw shapes follow the public APIs the dashboard reads from:

  - CoinGecko ``/coins/markets`` record  → ``normalize_market_record()``
  - CoinGecko ``/coins/{id}`` details    → ``extract_classification_inputs()``
  - GitHub repo + ``stats/commit_activity`` + contributors
                                         → ``compute_developer_metrics()``

Missing or ``null`` numeric market fields become ``0.0``.  The identifier
fields ``id``, ``symbol`` and ``name`` are required; their absence is a
caller error and raises ``KeyError`` rather than being papered over.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from token_radar.models.token import DeveloperMetrics, Token

# Trailing window used for commit growth: 26 weeks split into 13 + 13.
COMMIT_WINDOW_WEEKS = 26
COMMIT_HALF_WEEKS = 13
ACTIVE_DEV_WINDOW = timedelta(days=90)
MAX_FULL_TIME_DEVS = 50

# Token field → CoinGecko market record key.
_MARKET_FIELD_MAP: dict[str, str] = {
    "price":              "current_price",
    "market_cap":         "market_cap",
    "volume_24h":         "total_volume",
    "price_change_24h":   "price_change_percentage_24h",
    "price_change_7d":    "price_change_percentage_7d_in_currency",
    "price_change_30d":   "price_change_percentage_30d_in_currency",
    "circulating_supply": "circulating_supply",
    "total_supply":       "total_supply",
    "fdv":                "fully_diluted_valuation",
}


def normalize_market_record(raw: dict[str, Any]) -> Token:
    """Build a ``Token`` from one CoinGecko market record.

    Args:
        raw: Parsed JSON object from ``/coins/markets``.

    Returns:
        Frozen ``Token``; symbol upper-cased, absent numbers set to ``0.0``.

    Raises:
        KeyError: If ``id``, ``symbol`` or ``name`` is missing.
    """
    numeric = {field: _as_float(raw.get(key)) for field, key in _MARKET_FIELD_MAP.items()}
    return Token(
        id=str(raw["id"]),
        symbol=str(raw["symbol"]).upper(),
        name=str(raw["name"]),
        last_updated=_parse_timestamp(raw.get("last_updated")),
        **numeric,
    )


def compute_developer_metrics(
    token_id:        str,
    repo:            dict[str, Any],
    commit_activity: list[dict[str, Any]],
    contributors:    list[dict[str, Any]],
    now:             Optional[datetime] = None,
) -> DeveloperMetrics:
    """Summarize repository statistics into ``DeveloperMetrics``.

    Commit growth compares the last 13 weeks against the 13 weeks before
    them (from the trailing 26 weekly totals).  A zero first half yields 0%
    growth rather than an undefined ratio.

    Args:
        token_id:        ``Token.id`` the repository belongs to.
        repo:            GitHub repository object (``stargazers_count``,
                         ``forks_count``, ``pushed_at``).
        commit_activity: Weekly ``{"total": int, ...}`` entries, oldest first.
        contributors:    Contributor objects with optional ``last_commit_date``.
        now:             Reference time for the 90-day active window
                         (defaults to current UTC time).

    Returns:
        Frozen ``DeveloperMetrics``.
    """
    now = now or datetime.now(tz=timezone.utc)

    recent = commit_activity[-COMMIT_WINDOW_WEEKS:]
    first_half = sum(int(week.get("total") or 0) for week in recent[:COMMIT_HALF_WEEKS])
    second_half = sum(int(week.get("total") or 0) for week in recent[COMMIT_HALF_WEEKS:])
    if first_half > 0:
        commit_growth = (second_half - first_half) / first_half * 100.0
    else:
        commit_growth = 0.0

    cutoff = now - ACTIVE_DEV_WINDOW
    active = 0
    for contributor in contributors:
        last_commit = _parse_timestamp(contributor.get("last_commit_date"))
        if last_commit is not None and last_commit > cutoff:
            active += 1

    return DeveloperMetrics(
        token_id=token_id,
        full_time_devs=min(len(contributors), MAX_FULL_TIME_DEVS),
        monthly_active_devs=active,
        commit_growth_6m=commit_growth,
        last_commit=_parse_timestamp(repo.get("pushed_at")),
        github_stars=int(repo.get("stargazers_count") or 0),
        github_forks=int(repo.get("forks_count") or 0),
    )


def extract_classification_inputs(details: dict[str, Any]) -> tuple[str, list[str]]:
    """Pull ``(description, categories)`` out of a coin detail record.

    ``description`` may be a localized dict (``{"en": "..."}``) or a plain
    string.  ``None`` entries in ``categories`` are dropped.
    """
    raw_description = details.get("description") or ""
    if isinstance(raw_description, dict):
        description = raw_description.get("en") or ""
    else:
        description = str(raw_description)

    categories = [str(c) for c in (details.get("categories") or []) if c]
    return description, categories


# ── Helpers ───────────────────────────────────────────────────────────────────

def _as_float(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (``Z`` suffix allowed) into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
