"""
Tests for token_radar/scoring/breakout.py.

What we test
------------
compute_breakout():
  - Micro-cap surge with strong devs and a hot narrative fires every category.
  - Signals sorted by category weight (stable for ties).
  - Total weight is always 100, even with no developer data or narrative.
  - Probability clamped to the 5% floor for a dead token; never above 95.
  - Probability never decreases as volume rises (all else fixed).
  - Identical inputs give identical results, signal order included.
  - Signal descriptions carry the formatted figures.
  - market_cap <= 0 raises InvalidInputError.

narrative_strength():
  - Hot narratives graded on a lower bar than the rest.
"""

from __future__ import annotations

import pytest

from token_radar.models.token import DeveloperMetrics, Token
from token_radar.scoring.breakout import CATEGORY_WEIGHTS, compute_breakout, narrative_strength
from token_radar.scoring.ratios import InvalidInputError
from token_radar.taxonomy.narrative_taxonomy import NarrativeTag


def test_category_weights_total_100() -> None:
    assert sum(CATEGORY_WEIGHTS.values()) == 100


class TestFullSignalSet:
    def test_micro_cap_breakout(
        self, micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics
    ) -> None:
        result = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
        assert [s.type for s in result.signals] == [
            "volume", "price", "development", "narrative", "technical", "smart_money",
        ]
        assert [s.strength for s in result.signals] == [
            "strong", "strong", "strong", "strong", "strong", "moderate",
        ]
        assert result.weighted_score == pytest.approx(83.0)
        assert result.total_weight == 100
        assert result.probability == 83

    def test_descriptions(
        self, micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics
    ) -> None:
        result = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
        by_type = {s.type: s.description for s in result.signals}
        assert by_type["volume"] == "Exceptional volume: 20.0% of market cap (breakout signal)"
        assert by_type["price"] == "Strong momentum: +32.1% (7d), +9.4% (24h)"
        assert by_type["development"] == "High dev activity: +100.0% commits, 18 active devs"
        assert by_type["narrative"] == "Hot narrative: AI & ML (+140.0% sector)"
        assert by_type["technical"] == "Micro-cap breakout setup: $45.0M with 20.0% volume ratio"
        assert by_type["smart_money"] == "Potential smart money accumulation detected"

    def test_signal_weights_match_categories(
        self, micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics
    ) -> None:
        result = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
        for s in result.signals:
            assert s.weight == CATEGORY_WEIGHTS[s.type]


class TestDenominator:
    def test_render_without_dev_metrics(self, render_token: Token) -> None:
        result = compute_breakout(render_token, None, NarrativeTag.AI_ML)
        assert result.total_weight == 100
        assert [s.type for s in result.signals] == ["volume", "price", "narrative"]
        assert result.probability == 31

    def test_dev_metrics_raise_probability(
        self, render_token: Token, render_dev_metrics: DeveloperMetrics
    ) -> None:
        result = compute_breakout(render_token, render_dev_metrics, NarrativeTag.AI_ML)
        assert result.probability == 41

    def test_missing_narrative_lowers_probability(
        self, micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics
    ) -> None:
        with_narrative = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
        without = compute_breakout(micro_cap_token, strong_dev_metrics, None)
        assert without.total_weight == 100
        assert without.probability < with_narrative.probability
        assert "narrative" not in [s.type for s in without.signals]


class TestClamping:
    def test_dead_token_hits_floor(self, idle_token: Token) -> None:
        result = compute_breakout(idle_token)
        assert result.probability == 5
        assert [s.description for s in result.signals] == [
            "Stable price action: +0.0% (7d), +0.0% (24h)"
        ]

    def test_falling_token_has_no_signals(self) -> None:
        token = Token(
            id="t", symbol="T", name="T", market_cap=5e8, volume_24h=0.0,
            price_change_24h=-8.0, price_change_7d=-20.0,
        )
        result = compute_breakout(token)
        assert result.signals == ()
        assert result.probability == 5

    @pytest.mark.parametrize("tag", [None, *NarrativeTag])
    def test_probability_in_range(
        self, micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics, tag
    ) -> None:
        assert 5 <= compute_breakout(micro_cap_token, strong_dev_metrics, tag).probability <= 95


def test_probability_monotonic_in_volume(micro_cap_token: Token) -> None:
    probabilities = []
    for volume in [0, 500_000, 1_000_000, 2_000_000, 3_000_000, 5_000_000, 9_000_000, 20_000_000]:
        token = micro_cap_token.model_copy(update={"volume_24h": volume})
        probabilities.append(compute_breakout(token, None, NarrativeTag.DEFI).probability)
    assert probabilities == sorted(probabilities)


def test_breakout_is_deterministic(
    micro_cap_token: Token, strong_dev_metrics: DeveloperMetrics
) -> None:
    first = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
    second = compute_breakout(micro_cap_token, strong_dev_metrics, NarrativeTag.AI_ML)
    assert first == second
    assert [s.type for s in first.signals] == [s.type for s in second.signals]


def test_small_cap_technical_signal() -> None:
    token = Token(id="t", symbol="T", name="T", market_cap=5e8, volume_24h=2e7)
    signals = {s.type: s for s in compute_breakout(token).signals}
    assert signals["technical"].strength == "moderate"
    assert signals["technical"].description == "Small-cap with momentum: $500.0M showing volume"


def test_equal_weight_order_is_stable(micro_cap_token: Token) -> None:
    weak_devs = DeveloperMetrics(commit_growth_6m=10.0, monthly_active_devs=4)
    types = [s.type for s in compute_breakout(micro_cap_token, weak_devs, None).signals]
    assert types.index("price") < types.index("development")
    assert types.index("technical") < types.index("smart_money")


def test_non_positive_market_cap_raises() -> None:
    token = Token(id="t", symbol="T", name="T", market_cap=0.0, volume_24h=10.0)
    with pytest.raises(InvalidInputError):
        compute_breakout(token)


class TestNarrativeStrength:
    @pytest.mark.parametrize(
        "tag,change,expected",
        [
            (NarrativeTag.AI_ML, 150.0, "strong"),
            (NarrativeTag.DEPIN, 101.0, "strong"),
            (NarrativeTag.AI_ML, 100.0, "moderate"),
            (NarrativeTag.AI_ML, 40.0, "moderate"),
            (NarrativeTag.DEPIN, 30.0, "weak"),
            (NarrativeTag.DEFI, 150.0, "moderate"),
            (NarrativeTag.GAMING, 50.0, "weak"),
            (NarrativeTag.RWA, -10.0, "weak"),
        ],
    )
    def test_grades(self, tag: NarrativeTag, change: float, expected: str) -> None:
        assert narrative_strength(tag, change) == expected

    def test_weak_narrative_description(self) -> None:
        token = Token(id="t", symbol="T", name="T", market_cap=5e9, volume_24h=0.0)
        signals = compute_breakout(token, None, NarrativeTag.RWA).signals
        narrative = [s for s in signals if s.type == "narrative"][0]
        assert narrative.description == "Established narrative: RWA"
        assert narrative.strength == "weak"
