"""
Guarded ratio helpers shared by the scoring and breakout engines.

Every division by a market-data field goes through this module so that a
zero or negative denominator fails loudly with ``InvalidInputError`` instead
of leaking ``inf``/``nan`` into a score.

Market-cap tiers
----------------
    micro : cap <  $100M
    small : $100M <= cap < $1B
    mid   : $1B   <= cap < $10B
    large : cap >= $10B
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Literal, Optional

from token_radar.models.token import Token

MarketCapTier = Literal["micro", "small", "mid", "large"]

_UNLOCK_WINDOW = timedelta(days=182)
_UNLOCK_RISK_PCT = 5.0


# ── Custom exceptions ─────────────────────────────────────────────────────────


class InvalidInputError(ValueError):
    """Raised when an input value cannot be used by the engine.

    Attributes:
        field: Name of the offending field.
        value: The rejected value.
    """

    def __init__(self, field: str, value: float, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}={value!r}: {reason}")


# ── Ratios ────────────────────────────────────────────────────────────────────


def volume_to_market_cap_ratio(token: Token) -> float:
    """Return ``volume_24h / market_cap``.

    Raises:
        InvalidInputError: If ``market_cap <= 0``.
    """
    if token.market_cap <= 0:
        raise InvalidInputError(
            "market_cap", token.market_cap,
            f"token '{token.id}' needs a positive market cap for volume ratios",
        )
    return token.volume_24h / token.market_cap


def float_percentage(circulating_supply: float, total_supply: float) -> float:
    """Circulating supply as a percentage of total supply.

    Raises:
        InvalidInputError: If ``total_supply <= 0``.
    """
    if total_supply <= 0:
        raise InvalidInputError("total_supply", total_supply, "must be positive")
    return circulating_supply / total_supply * 100.0


def market_cap_tier(market_cap: float) -> MarketCapTier:
    """Bucket a market cap into micro / small / mid / large."""
    if market_cap < 100_000_000:
        return "micro"
    if market_cap < 1_000_000_000:
        return "small"
    if market_cap < 10_000_000_000:
        return "mid"
    return "large"


def listing_liquidity_score(token: Token) -> float:
    """Volume-derived liquidity proxy: ``ratio * 1000`` clamped to [30, 90]."""
    return _clamp(volume_to_market_cap_ratio(token) * 1000.0, 30.0, 90.0)


def is_unlock_risky(
    unlock_date: Optional[datetime],
    unlock_percentage: float,
    now: Optional[datetime] = None,
) -> bool:
    """True if an unlock of more than 5% of supply lands within ~6 months.

    Past unlock dates count as "within the window"; an unknown date never does.
    """
    if unlock_date is None:
        return False
    now = now or datetime.now(tz=timezone.utc)
    if unlock_date.tzinfo is None:
        unlock_date = unlock_date.replace(tzinfo=timezone.utc)
    return unlock_date < now + _UNLOCK_WINDOW and unlock_percentage > _UNLOCK_RISK_PCT


# ── Rounding ──────────────────────────────────────────────────────────────────


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    The value is first snapped to 6 decimals so float noise from the weight
    products (``25 * 0.9`` and friends) cannot flip a half.
    """
    return int(math.floor(round(value, 6) + 0.5))


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
