"""
Unit Tests for AllocationEngine
"""

import pytest

from invest_advisor.domain.models import AssetAllocation, RiskTolerance


class TestComputeAllocation:

    @pytest.mark.parametrize("tier", list(RiskTolerance))
    @pytest.mark.parametrize("capital", [1, 1234.56, 50000, 10_000_000])
    def test_amounts_sum_to_capital(self, allocation_engine, tier, capital):
        allocations = allocation_engine.compute_allocation(tier, capital)
        assert sum(a.amount for a in allocations) == pytest.approx(capital)

    def test_moderate_amounts(self, allocation_engine):
        allocations = allocation_engine.compute_allocation(RiskTolerance.MODERATE, 50000)
        assert [(a.name, a.amount) for a in allocations] == [
            ("Indian Index Funds", 17500),
            ("Indian Growth Stocks", 12500),
            ("International Funds", 10000),
            ("Indian Bonds", 7500),
            ("Gold", 2500),
        ]

    def test_order_and_colors_follow_template(self, allocation_engine, config_engine):
        template = config_engine.get_tier("high").allocation_template
        allocations = allocation_engine.compute_allocation("high", 1000)
        assert [(a.name, a.percentage, a.color) for a in allocations] == [
            (t.name, t.percentage, t.color) for t in template
        ]

    @pytest.mark.parametrize("capital", [0, -10])
    def test_non_positive_capital_rejected(self, allocation_engine, capital):
        with pytest.raises(ValueError):
            allocation_engine.compute_allocation(RiskTolerance.LOW, capital)


class TestConvertAllocation:

    def test_single_conversion_point(self, allocation_engine):
        base = allocation_engine.compute_allocation(RiskTolerance.LOW, 50000)
        converted = allocation_engine.convert_allocation(base, 83.0)

        for usd, inr in zip(base, converted):
            assert inr.amount == pytest.approx(50000 * 83.0 * usd.percentage / 100)
            assert inr.name == usd.name
        # inputs untouched
        assert base[0].amount == 20000

    def test_invalid_rate(self, allocation_engine):
        base = [AssetAllocation(name="Gold", percentage=100, color="#fff", amount=10)]
        with pytest.raises(ValueError):
            allocation_engine.convert_allocation(base, 0)
