"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class RiskTolerance(str, Enum):
    """Risk tier selecting every static recommendation table"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class StrategyType(str, Enum):
    """How the capital should be deployed"""
    LUMP_SUM = "lump_sum"
    SIP = "sip"


class InvalidProfileError(ValueError):
    """Raised when an investment profile cannot be analysed"""


# USD->INR rate used whenever no live rate is available
FALLBACK_EXCHANGE_RATE = 83.0


# ----------------------------------------------------------------------
# Inputs
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class InvestmentProfile:
    """Investor inputs collected by the wizard - Immutable"""
    capital_amount: float
    investment_period: int
    risk_tolerance: RiskTolerance
    target_growth: float
    sectors: FrozenSet[str] = frozenset()
    preferences: str = ""

    def __post_init__(self):
        try:
            tier = RiskTolerance(self.risk_tolerance)
        except ValueError:
            raise InvalidProfileError(f"Unknown risk tolerance: {self.risk_tolerance}")
        object.__setattr__(self, "risk_tolerance", tier)

        if not isinstance(self.sectors, frozenset):
            object.__setattr__(self, "sectors", frozenset(self.sectors or ()))

        if self.capital_amount is None or self.capital_amount <= 0:
            raise InvalidProfileError("Capital amount must be positive")
        if isinstance(self.investment_period, bool) or int(self.investment_period) != self.investment_period:
            raise InvalidProfileError("Investment period must be a whole number of years")
        if self.investment_period <= 0:
            raise InvalidProfileError("Investment period must be positive")
        if self.target_growth is None or self.target_growth < 0:
            raise InvalidProfileError("Target growth cannot be negative")

    def to_dict(self) -> Dict:
        return {
            "capital_amount": self.capital_amount,
            "investment_period": self.investment_period,
            "sectors": sorted(self.sectors),
            "risk_tolerance": self.risk_tolerance.value,
            "target_growth": self.target_growth,
            "preferences": self.preferences,
        }


# ----------------------------------------------------------------------
# Static tier tables
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class AllocationTemplate:
    """One asset-class slice of a tier template"""
    name: str
    percentage: int
    color: str

    def __post_init__(self):
        if not 0 <= self.percentage <= 100:
            raise ValueError(f"Percentage out of range for {self.name}: {self.percentage}")


@dataclass(frozen=True)
class SecurityTemplate:
    """A recommended security before price enrichment"""
    symbol: str
    name: str
    sector: str
    allocation: int
    rationale: str

    def __post_init__(self):
        if not self.symbol:
            raise ValueError("Security symbol cannot be empty")


@dataclass(frozen=True)
class RiskTierProfile:
    """Everything keyed by a single risk tier"""
    tier: RiskTolerance
    score: int
    description: str
    allocation_template: Tuple[AllocationTemplate, ...]
    securities: Tuple[SecurityTemplate, ...]


@dataclass(frozen=True)
class CatalogEntry:
    """Research universe entry (stock or mutual fund)"""
    symbol: str
    name: str
    sector: str
    kind: str
    expense_ratio: Optional[float] = None


# ----------------------------------------------------------------------
# Market data
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Quote:
    """Price snapshot; source names the provider that produced it"""
    symbol: str
    price: float
    change: float
    change_percent: float
    source: str

    @staticmethod
    def unavailable(symbol: str) -> "Quote":
        return Quote(symbol=symbol, price=0.0, change=0.0, change_percent=0.0, source="unavailable")


# ----------------------------------------------------------------------
# Recommendation
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class AssetAllocation:
    """Asset-class slice with a currency amount"""
    name: str
    percentage: int
    color: str
    amount: float


@dataclass(frozen=True)
class SpecificRecommendation:
    """Recommended security, optionally enriched with a price"""
    symbol: str
    name: str
    sector: str
    allocation: int
    rationale: str
    current_price: Optional[float] = None
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None
    price_in_inr: Optional[float] = None
    price_source: Optional[str] = None


@dataclass(frozen=True)
class Strategy:
    type: StrategyType
    rationale: str
    monthly_amount: Optional[int] = None

    def __post_init__(self):
        if self.type == StrategyType.SIP and self.monthly_amount is None:
            raise ValueError("SIP strategy requires a monthly amount")
        if self.type == StrategyType.LUMP_SUM and self.monthly_amount is not None:
            raise ValueError("Lump sum strategy has no monthly amount")


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    description: str


@dataclass(frozen=True)
class InvestmentRecommendation:
    """Complete advisory output for one analysis call"""
    asset_allocation: Tuple[AssetAllocation, ...]
    specific_recommendations: Tuple[SpecificRecommendation, ...]
    strategy: Strategy
    process_guide: Tuple[str, ...]
    risk_assessment: RiskAssessment

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["strategy"]["type"] = self.strategy.type.value
        if self.strategy.monthly_amount is None:
            data["strategy"].pop("monthly_amount")
        return data


@dataclass(frozen=True)
class AnalysisResult:
    recommendation: InvestmentRecommendation
    exchange_rate: float

    def to_dict(self) -> Dict:
        return {
            "recommendation": self.recommendation.to_dict(),
            "exchange_rate": self.exchange_rate,
        }


@dataclass(frozen=True)
class HistoricalData:
    """Chart series: one value per month label"""
    labels: Tuple[str, ...]
    data: Tuple[int, ...]

    def __post_init__(self):
        if len(self.labels) != len(self.data):
            raise ValueError("Labels and data must have the same length")
