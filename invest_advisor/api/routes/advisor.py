"""
Advisor Routes
Stateless analysis and chart data
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException
import logging

from invest_advisor.domain.models import InvalidProfileError
from invest_advisor.domain.schemas.advisor import (
    AnalysisResponse,
    HistoricalDataSchema,
    HistoryRequest,
    InvestmentProfileRequest,
)
from invest_advisor.domain.services.history_engine import generate_series

logger = logging.getLogger(__name__)
router = APIRouter()


def get_composer():
    from invest_advisor.main import composer

    if composer is None:
        raise HTTPException(status_code=500, detail="Advisor not initialised")
    return composer


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(payload: InvestmentProfileRequest):
    """
    Analyse a profile and return the recommendation with the FX rate used
    """
    composer = get_composer()
    try:
        profile = payload.to_domain()
    except InvalidProfileError as exc:
        logger.info(f"Rejected profile: {exc}")
        raise HTTPException(status_code=400, detail=str(exc))

    result = await composer.analyze(profile)
    return result.to_dict()


@router.post("/history", response_model=HistoricalDataSchema)
async def history(payload: HistoryRequest):
    """
    Synthetic 12-month trajectory for the results chart
    """
    allocation = [entry.to_domain() for entry in payload.asset_allocation]
    series = generate_series(allocation)
    return asdict(series)
