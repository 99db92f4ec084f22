"""
Configuration API Routes
Expose tier tables and the research catalog
"""

from fastapi import APIRouter, HTTPException
from typing import List, Optional
from pydantic import BaseModel

from invest_advisor.domain.models import RiskTolerance

router = APIRouter()


# Response models
class AllocationSliceInfo(BaseModel):
    name: str
    percentage: int
    color: str


class SecurityInfo(BaseModel):
    symbol: str
    name: str
    sector: str
    allocation: int
    rationale: str


class TierInfo(BaseModel):
    tier: str
    risk_score: int
    description: str
    allocation_template: List[AllocationSliceInfo]
    securities: List[SecurityInfo]


class CatalogEntryInfo(BaseModel):
    symbol: str
    name: str
    sector: str
    kind: str
    expense_ratio: Optional[float] = None


class CatalogInfo(BaseModel):
    stocks: List[CatalogEntryInfo]
    mutual_funds: List[CatalogEntryInfo]


def get_config_engine():
    from invest_advisor.main import config_engine

    if config_engine is None:
        raise HTTPException(status_code=500, detail="Configuration not loaded")
    return config_engine


def _tier_info(profile) -> TierInfo:
    return TierInfo(
        tier=profile.tier.value,
        risk_score=profile.score,
        description=profile.description,
        allocation_template=[
            AllocationSliceInfo(name=e.name, percentage=e.percentage, color=e.color)
            for e in profile.allocation_template
        ],
        securities=[
            SecurityInfo(
                symbol=s.symbol,
                name=s.name,
                sector=s.sector,
                allocation=s.allocation,
                rationale=s.rationale,
            )
            for s in profile.securities
        ],
    )


@router.get("/tiers", response_model=List[TierInfo])
async def get_tiers():
    """
    Get every risk tier with its allocation template and picks
    """
    config_engine = get_config_engine()
    return [_tier_info(config_engine.get_tier(tier)) for tier in RiskTolerance]


@router.get("/tiers/{tier}", response_model=TierInfo)
async def get_tier(tier: str):
    config_engine = get_config_engine()
    try:
        risk = RiskTolerance(tier.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown risk tier: {tier}")
    return _tier_info(config_engine.get_tier(risk))


@router.get("/catalog", response_model=CatalogInfo)
async def get_catalog():
    """
    Indian stocks and mutual funds in the research universe
    """
    catalog = get_config_engine().catalog

    def _entry(e):
        return CatalogEntryInfo(
            symbol=e.symbol,
            name=e.name,
            sector=e.sector,
            kind=e.kind,
            expense_ratio=e.expense_ratio,
        )

    return CatalogInfo(
        stocks=[_entry(e) for e in catalog.stocks],
        mutual_funds=[_entry(e) for e in catalog.mutual_funds],
    )


@router.get("/process-guide", response_model=List[str])
async def get_process_guide():
    return list(get_config_engine().process_guide)
