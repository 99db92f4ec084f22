"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    RiskTolerance,
    StrategyType,

    # Errors
    InvalidProfileError,

    # Constants
    FALLBACK_EXCHANGE_RATE,

    # Static tables
    AllocationTemplate,
    CatalogEntry,
    RiskTierProfile,
    SecurityTemplate,

    # Entities
    AnalysisResult,
    AssetAllocation,
    HistoricalData,
    InvestmentProfile,
    InvestmentRecommendation,
    Quote,
    RiskAssessment,
    SpecificRecommendation,
    Strategy,
)

__all__ = [
    # Enums
    "RiskTolerance",
    "StrategyType",

    # Errors
    "InvalidProfileError",

    # Constants
    "FALLBACK_EXCHANGE_RATE",

    # Static tables
    "AllocationTemplate",
    "CatalogEntry",
    "RiskTierProfile",
    "SecurityTemplate",

    # Entities
    "AnalysisResult",
    "AssetAllocation",
    "HistoricalData",
    "InvestmentProfile",
    "InvestmentRecommendation",
    "Quote",
    "RiskAssessment",
    "SpecificRecommendation",
    "Strategy",
]
