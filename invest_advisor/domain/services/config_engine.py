"""
CONFIG ENGINE
Load, validate, and expose the advisory tables

RESPONSIBILITIES:
- Load YAML configuration files
- Validate tier tables (every tier present, percentages sum to 100)
- Expose read-only typed objects keyed by risk tier

RULES:
❌ No defaults if config missing
❌ No inline tier tables in code
✅ Fail fast on invalid config
✅ Deterministic output
"""

import yaml
from pathlib import Path
from typing import Dict, List, Any, Tuple
from dataclasses import dataclass

from invest_advisor.domain.models import (
    AllocationTemplate,
    CatalogEntry,
    RiskTierProfile,
    RiskTolerance,
    SecurityTemplate,
)


DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


@dataclass(frozen=True)
class StrategyRules:
    """Thresholds and wording for the lump sum / SIP decision"""
    sip_return_threshold: float
    min_period_years: int
    sip_rationale: str
    lump_sum_rationale: str


@dataclass(frozen=True)
class SecurityCatalog:
    """Research universe of Indian stocks and mutual funds"""
    stocks: List[CatalogEntry]
    mutual_funds: List[CatalogEntry]


class ConfigEngine:
    """
    Configuration Engine
    Single source of truth for all tier tables
    """

    def __init__(self, config_dir: Path = DEFAULT_CONFIG_DIR):
        """Initialize with config directory"""
        self.config_dir = Path(config_dir)
        self._tiers: Dict[RiskTolerance, RiskTierProfile] = None
        self._strategy_rules: StrategyRules = None
        self._process_guide: Tuple[str, ...] = None
        self._catalog: SecurityCatalog = None
        self._app_config: Dict = None

    def load_all(self) -> None:
        """Load all configuration files"""
        self._load_app_config()
        allocations = self._load_allocations()
        recommendations = self._load_securities()
        self._load_guide(allocations, recommendations)
        self._validate_all()

    def _read_yaml(self, filename: str, label: str) -> Dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"{label} config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"{label} config must be a mapping: {path}")
        return data

    def _load_app_config(self) -> None:
        """Load application config from app.yml"""
        self._app_config = self._read_yaml("app.yml", "App")

    def _load_allocations(self) -> Dict[RiskTolerance, Tuple[AllocationTemplate, ...]]:
        """Load asset-class templates from allocations.yml"""
        data = self._read_yaml("allocations.yml", "Allocation")

        templates = {}
        for tier in RiskTolerance:
            if tier.value not in data:
                raise ValueError(f"Allocation template missing for tier: {tier.value}")
            templates[tier] = tuple(
                AllocationTemplate(
                    name=entry['name'],
                    percentage=int(entry['percentage']),
                    color=str(entry['color']),
                )
                for entry in data[tier.value]
            )
        return templates

    def _load_securities(self) -> Dict[RiskTolerance, Tuple[SecurityTemplate, ...]]:
        """Load per-tier picks and the research catalog from securities.yml"""
        data = self._read_yaml("securities.yml", "Securities")

        picks = data.get('recommendations', {})
        recommendations = {}
        for tier in RiskTolerance:
            if tier.value not in picks:
                raise ValueError(f"Security list missing for tier: {tier.value}")
            recommendations[tier] = tuple(
                SecurityTemplate(
                    symbol=entry['symbol'],
                    name=entry['name'],
                    sector=entry['sector'],
                    allocation=int(entry['allocation']),
                    rationale=entry['rationale'],
                )
                for entry in picks[tier.value]
            )

        catalog = data.get('catalog', {})
        stocks = [
            CatalogEntry(
                symbol=entry['symbol'],
                name=entry['name'],
                sector=entry['sector'],
                kind="stock",
            )
            for entry in catalog.get('stocks', [])
        ]
        funds = [
            CatalogEntry(
                symbol=entry['symbol'],
                name=entry['name'],
                sector=entry['sector'],
                kind="mutual_fund",
                expense_ratio=float(entry['expense_ratio']),
            )
            for entry in catalog.get('mutual_funds', [])
        ]

        symbols = [entry.symbol for entry in stocks + funds]
        if len(symbols) != len(set(symbols)):
            raise ValueError("Duplicate symbols found in security catalog")

        self._catalog = SecurityCatalog(stocks=stocks, mutual_funds=funds)
        return recommendations

    def _load_guide(
        self,
        allocations: Dict[RiskTolerance, Tuple[AllocationTemplate, ...]],
        recommendations: Dict[RiskTolerance, Tuple[SecurityTemplate, ...]],
    ) -> None:
        """Load risk profiles, strategy rules and process guide from guide.yml"""
        data = self._read_yaml("guide.yml", "Guide")

        profiles = data['risk_profiles']
        tiers = {}
        for tier in RiskTolerance:
            if tier.value not in profiles:
                raise ValueError(f"Risk profile missing for tier: {tier.value}")
            profile = profiles[tier.value]
            tiers[tier] = RiskTierProfile(
                tier=tier,
                score=int(profile['score']),
                description=profile['description'],
                allocation_template=allocations[tier],
                securities=recommendations[tier],
            )
        self._tiers = tiers

        strategy = data['strategy']
        self._strategy_rules = StrategyRules(
            sip_return_threshold=float(strategy['sip_return_threshold']),
            min_period_years=int(strategy['min_period_years']),
            sip_rationale=strategy['sip_rationale'],
            lump_sum_rationale=strategy['lump_sum_rationale'],
        )

        self._process_guide = tuple(str(step) for step in data['process_guide'])

    def _validate_all(self) -> None:
        """Validate all configurations"""
        for tier, profile in self._tiers.items():
            if not profile.allocation_template:
                raise ValueError(f"Empty allocation template for tier: {tier.value}")
            total = sum(entry.percentage for entry in profile.allocation_template)
            if total != 100:
                raise ValueError(f"Allocation template for {tier.value} sums to {total}, expected 100")

            if not profile.securities:
                raise ValueError(f"Empty security list for tier: {tier.value}")
            total = sum(security.allocation for security in profile.securities)
            if total != 100:
                raise ValueError(f"Security list for {tier.value} sums to {total}, expected 100")

            symbols = [security.symbol for security in profile.securities]
            if len(symbols) != len(set(symbols)):
                raise ValueError(f"Duplicate securities for tier: {tier.value}")

        if not self._process_guide:
            raise ValueError("Process guide cannot be empty")

        if "{period}" not in self._strategy_rules.sip_rationale:
            raise ValueError("SIP rationale must reference {period}")

    # Public getters

    def _require_loaded(self) -> None:
        if self._tiers is None:
            raise RuntimeError("Config not loaded. Call load_all() first")

    def get_tier(self, tier: RiskTolerance) -> RiskTierProfile:
        """Get every table for a risk tier"""
        self._require_loaded()
        return self._tiers[RiskTolerance(tier)]

    @property
    def tiers(self) -> Dict[RiskTolerance, RiskTierProfile]:
        """Get all tier profiles"""
        self._require_loaded()
        return dict(self._tiers)

    @property
    def strategy_rules(self) -> StrategyRules:
        """Get strategy thresholds and wording"""
        self._require_loaded()
        return self._strategy_rules

    @property
    def process_guide(self) -> Tuple[str, ...]:
        """Get the fixed onboarding steps"""
        self._require_loaded()
        return self._process_guide

    @property
    def catalog(self) -> SecurityCatalog:
        """Get the research catalog"""
        self._require_loaded()
        return self._catalog

    @property
    def strategy_version(self) -> str:
        """Get current strategy version"""
        self._require_loaded()
        return str(self._app_config.get('strategy_version', 'unversioned'))

    def get_app_setting(self, *keys) -> Any:
        """Get app setting by nested keys"""
        if self._app_config is None:
            raise RuntimeError("Config not loaded. Call load_all() first")

        value = self._app_config
        for key in keys:
            value = value[key]
        return value
