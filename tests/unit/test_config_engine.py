import shutil

import pytest
import yaml

from invest_advisor.domain.models import RiskTolerance
from invest_advisor.domain.services.config_engine import ConfigEngine
from conftest import CONFIG_DIR


@pytest.fixture
def config_copy(tmp_path):
    """Writable copy of the shipped config directory"""
    target = tmp_path / "config"
    shutil.copytree(CONFIG_DIR, target)
    return target


def _rewrite(path, mutate):
    with open(path) as f:
        data = yaml.safe_load(f)
    mutate(data)
    with open(path, "w") as f:
        yaml.safe_dump(data, f)


class TestShippedTables:
    """The shipped YAML satisfies every table invariant"""

    @pytest.mark.parametrize("tier", list(RiskTolerance))
    def test_allocation_template_sums_to_100(self, config_engine, tier):
        template = config_engine.get_tier(tier).allocation_template
        assert sum(entry.percentage for entry in template) == 100

    @pytest.mark.parametrize("tier", list(RiskTolerance))
    def test_security_list_sums_to_100(self, config_engine, tier):
        securities = config_engine.get_tier(tier).securities
        assert sum(s.allocation for s in securities) == 100

    def test_template_sizes(self, config_engine):
        sizes = {
            tier: (len(p.allocation_template), len(p.securities))
            for tier, p in config_engine.tiers.items()
        }
        assert sizes == {
            RiskTolerance.LOW: (4, 5),
            RiskTolerance.MODERATE: (5, 5),
            RiskTolerance.HIGH: (5, 6),
        }

    def test_risk_scores(self, config_engine):
        scores = {tier: p.score for tier, p in config_engine.tiers.items()}
        assert scores == {RiskTolerance.LOW: 3, RiskTolerance.MODERATE: 6, RiskTolerance.HIGH: 8}

    def test_low_template_order(self, config_engine):
        names = [e.name for e in config_engine.get_tier("low").allocation_template]
        assert names == [
            "Government Bonds (Indian)",
            "Blue Chip Indian Stocks",
            "Gold & Precious Metals",
            "Real Estate (REITs)",
        ]

    def test_process_guide_has_ten_ordered_steps(self, config_engine):
        guide = config_engine.process_guide
        assert len(guide) == 10
        assert guide[0].startswith("1. Open a Demat")
        assert guide[-1].startswith("10. ")

    def test_strategy_rules(self, config_engine):
        rules = config_engine.strategy_rules
        assert rules.sip_return_threshold == 12
        assert rules.min_period_years == 2
        assert "{period}-year timeline" in rules.sip_rationale

    def test_catalog(self, config_engine):
        catalog = config_engine.catalog
        assert len(catalog.stocks) == 10
        assert len(catalog.mutual_funds) == 6
        parag = next(f for f in catalog.mutual_funds if f.symbol == "PARAG-FLEXI")
        assert parag.expense_ratio == 0.80
        assert all(s.kind == "stock" for s in catalog.stocks)


class TestValidation:
    """Invalid configuration fails fast"""

    def test_not_loaded(self):
        engine = ConfigEngine(CONFIG_DIR)
        with pytest.raises(RuntimeError, match="Config not loaded"):
            engine.get_tier(RiskTolerance.LOW)

    def test_missing_file(self, config_copy):
        (config_copy / "guide.yml").unlink()
        with pytest.raises(FileNotFoundError):
            ConfigEngine(config_copy).load_all()

    def test_allocation_not_summing_to_100(self, config_copy):
        def mutate(data):
            data["moderate"][0]["percentage"] = 30

        _rewrite(config_copy / "allocations.yml", mutate)
        with pytest.raises(ValueError, match="moderate sums to 95"):
            ConfigEngine(config_copy).load_all()

    def test_security_list_not_summing_to_100(self, config_copy):
        def mutate(data):
            data["recommendations"]["high"].pop()

        _rewrite(config_copy / "securities.yml", mutate)
        with pytest.raises(ValueError, match="Security list for high"):
            ConfigEngine(config_copy).load_all()

    def test_missing_tier(self, config_copy):
        _rewrite(config_copy / "allocations.yml", lambda data: data.pop("high"))
        with pytest.raises(ValueError, match="missing for tier: high"):
            ConfigEngine(config_copy).load_all()

    def test_duplicate_catalog_symbol(self, config_copy):
        def mutate(data):
            data["catalog"]["stocks"].append(dict(data["catalog"]["stocks"][0]))

        _rewrite(config_copy / "securities.yml", mutate)
        with pytest.raises(ValueError, match="Duplicate symbols"):
            ConfigEngine(config_copy).load_all()
