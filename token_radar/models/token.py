"""
Token market snapshot and developer activity models.

``Token`` is the normalized market record every engine function consumes.
All percentage fields hold signed percent values (``12.5`` means +12.5%),
never fractions.  Numeric fields default to ``0.0`` because the upstream
market-data feed routinely omits them; only ``id``, ``symbol`` and ``name``
are required.

``DeveloperMetrics`` is optional per token.  Its absence is represented by
``None`` at every call site, never by a zeroed instance, so scoring can tell
"no repository data" apart from "an idle repository".

Both models are frozen (immutable) after construction.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Token(BaseModel):
    """Immutable market snapshot of one token.

    Attributes:
        id: Market-data identifier (e.g. ``"render-token"``).
        symbol: Upper-case ticker (e.g. ``"RNDR"``).
        name: Display name.
        price: Spot price in USD.
        market_cap: Market capitalization in USD.
        volume_24h: Trailing 24h traded volume in USD.
        price_change_24h: 24h price change in percent.
        price_change_7d: 7d price change in percent.
        price_change_30d: 30d price change in percent.
        circulating_supply: Circulating token count.
        total_supply: Total token count.
        fdv: Fully-diluted valuation in USD.
        last_updated: UTC timestamp of the market snapshot, if known.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    name: str
    price: float = 0.0
    market_cap: float = 0.0
    volume_24h: float = 0.0
    price_change_24h: float = 0.0
    price_change_7d: float = 0.0
    price_change_30d: float = 0.0
    circulating_supply: float = 0.0
    total_supply: float = 0.0
    fdv: float = 0.0
    last_updated: Optional[datetime] = None

    @field_validator("id", "symbol", "name")
    @classmethod
    def validate_identifier_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Token identifier fields must not be empty.")
        return v

    @field_validator("volume_24h", "circulating_supply", "price")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Price, volume and supply values must be non-negative.")
        return v


class DeveloperMetrics(BaseModel):
    """Repository activity summary for a token's main code repository.

    Derived from a 26-week trailing window of weekly commit totals, split
    into two 13-week halves for the growth comparison.

    Attributes:
        token_id: ``Token.id`` this record belongs to.
        full_time_devs: Contributor-count based estimate, capped at 50.
        monthly_active_devs: Contributors with a commit in the last 90 days.
        commit_growth_6m: Percent change of second-half vs first-half commits.
        last_commit: UTC timestamp of the last push, if known.
        github_stars: Repository star count.
        github_forks: Repository fork count.
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = ""
    full_time_devs: int = 0
    monthly_active_devs: int = 0
    commit_growth_6m: float = 0.0
    last_commit: Optional[datetime] = None
    github_stars: int = 0
    github_forks: int = 0

    @field_validator("full_time_devs", "monthly_active_devs", "github_stars", "github_forks")
    @classmethod
    def validate_counts_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Developer and repository counts must be non-negative.")
        return v
