"""
Shared pytest fixtures for the Token Radar test suite.

Provides:
  - Sample domain object factories (``Token``, ``DeveloperMetrics``) used by
    the scoring, breakout and reporting tests.
  - ``sample_snapshot_path``: the committed offline snapshot fixture.
  - ``write_snapshot``: writes an ad-hoc snapshot JSON into ``tmp_path``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from token_radar.models.token import DeveloperMetrics, Token

FIXTURES_DIR = Path(__file__).parent.parent / "data" / "fixtures"


# ── Domain object fixtures ────────────────────────────────────────────────────

@pytest.fixture
def render_token() -> Token:
    """Mid-cap AI token with a strong month (the canonical high scorer)."""
    return Token(
        id="render-token",
        symbol="RNDR",
        name="Render",
        price=7.42,
        market_cap=3_850_000_000,
        volume_24h=125_000_000,
        price_change_24h=5.2,
        price_change_7d=12.8,
        price_change_30d=410.0,
        circulating_supply=518_000_000,
        total_supply=536_870_912,
        fdv=3_980_000_000,
    )


@pytest.fixture
def render_dev_metrics() -> DeveloperMetrics:
    return DeveloperMetrics(
        token_id="render-token",
        full_time_devs=45,
        monthly_active_devs=45,
        commit_growth_6m=42.0,
        github_stars=1840,
        github_forks=312,
    )


@pytest.fixture
def micro_cap_token() -> Token:
    """Micro-cap with a volume surge and strong momentum (breakout setup)."""
    return Token(
        id="nexa-compute",
        symbol="NXC",
        name="Nexa Compute",
        price=0.094,
        market_cap=45_000_000,
        volume_24h=9_000_000,
        price_change_24h=9.4,
        price_change_7d=32.1,
        price_change_30d=140.0,
    )


@pytest.fixture
def strong_dev_metrics() -> DeveloperMetrics:
    return DeveloperMetrics(
        token_id="nexa-compute",
        full_time_devs=21,
        monthly_active_devs=18,
        commit_growth_6m=100.0,
    )


@pytest.fixture
def idle_token() -> Token:
    """Mid-cap token with no volume and no price movement."""
    return Token(
        id="idle-coin",
        symbol="IDLE",
        name="Idle Coin",
        price=1.0,
        market_cap=2_000_000_000,
        volume_24h=0.0,
    )


# ── Snapshot fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def sample_snapshot_path() -> Path:
    """Path to the committed sample snapshot."""
    return FIXTURES_DIR / "sample_snapshot.json"


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes ``{"tokens": [...]}`` and returns its path."""

    def _write(tokens: list[dict[str, Any]], name: str = "snapshot.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"tokens": tokens}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def market_record() -> Callable[..., dict[str, Any]]:
    """Return a factory for CoinGecko-shaped market records with overrides."""

    def _make(**overrides: Any) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": "test-token",
            "symbol": "tst",
            "name": "Test Token",
            "current_price": 1.25,
            "market_cap": 500_000_000,
            "total_volume": 20_000_000,
            "price_change_percentage_24h": 1.5,
            "price_change_percentage_7d_in_currency": 4.0,
            "price_change_percentage_30d_in_currency": 22.0,
            "circulating_supply": 400_000_000,
            "total_supply": 1_000_000_000,
            "fully_diluted_valuation": 1_250_000_000,
            "last_updated": "2026-10-19T08:55:00Z",
        }
        record.update(overrides)
        return record

    return _make
