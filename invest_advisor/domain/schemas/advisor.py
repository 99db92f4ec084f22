from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional

from invest_advisor.domain.models import AssetAllocation, InvestmentProfile


class InvestmentProfileRequest(BaseModel):
    capital_amount: float = Field(..., gt=0, description="Capital in USD")
    investment_period: int = Field(..., gt=0, description="Horizon in years")
    sectors: List[str] = Field(default_factory=list)
    risk_tolerance: Literal["low", "moderate", "high"]
    target_growth: float = Field(..., ge=0, description="Target portfolio value in USD")
    preferences: str = ""

    def to_domain(self) -> InvestmentProfile:
        return InvestmentProfile(
            capital_amount=self.capital_amount,
            investment_period=self.investment_period,
            sectors=frozenset(self.sectors),
            risk_tolerance=self.risk_tolerance,
            target_growth=self.target_growth,
            preferences=self.preferences,
        )


class AssetAllocationSchema(BaseModel):
    name: str
    percentage: int
    color: str
    amount: float

    def to_domain(self) -> AssetAllocation:
        return AssetAllocation(
            name=self.name,
            percentage=self.percentage,
            color=self.color,
            amount=self.amount,
        )


class SpecificRecommendationSchema(BaseModel):
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


class StrategySchema(BaseModel):
    type: Literal["lump_sum", "sip"]
    rationale: str
    monthly_amount: Optional[int] = None


class RiskAssessmentSchema(BaseModel):
    score: int
    description: str


class InvestmentRecommendationSchema(BaseModel):
    asset_allocation: List[AssetAllocationSchema]
    specific_recommendations: List[SpecificRecommendationSchema]
    strategy: StrategySchema
    process_guide: List[str]
    risk_assessment: RiskAssessmentSchema


class AnalysisResponse(BaseModel):
    recommendation: InvestmentRecommendationSchema
    exchange_rate: float


class HistoryRequest(BaseModel):
    asset_allocation: List[AssetAllocationSchema] = Field(default_factory=list)


class HistoricalDataSchema(BaseModel):
    labels: List[str]
    data: List[int]


class SessionStateSchema(BaseModel):
    session_id: str
    current_step: int
    is_loading: bool
    exchange_rate: float
    profile: Optional[Dict] = None
    recommendation: Optional[InvestmentRecommendationSchema] = None


class StepUpdate(BaseModel):
    step: int = Field(..., ge=0, le=2)


class QuoteSchema(BaseModel):
    symbol: str
    price: float
    change: float
    change_percent: float
    source: str


class ExchangeRateSchema(BaseModel):
    base_currency: str
    target_currency: str
    rate: float
