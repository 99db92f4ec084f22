"""
Market Data routes - exchange rate, quotes & gateway status.
"""

from fastapi import APIRouter, HTTPException

from invest_advisor.config import settings
from invest_advisor.domain.schemas.advisor import ExchangeRateSchema, QuoteSchema

router = APIRouter()


def get_gateway():
    from invest_advisor.main import gateway

    if gateway is None:
        raise HTTPException(status_code=500, detail="Market data gateway not initialised")
    return gateway


@router.get("/exchange-rate", response_model=ExchangeRateSchema)
async def exchange_rate():
    """Current USD→INR rate (fallback constant when the source is down)."""
    rate = await get_gateway().fetch_exchange_rate()
    return {
        "base_currency": settings.BASE_CURRENCY,
        "target_currency": settings.TARGET_CURRENCY,
        "rate": rate,
    }


@router.get("/quote/{symbol}", response_model=QuoteSchema)
async def quote(symbol: str):
    """Live quote, or synthetic data when every provider fails."""
    symbol = symbol.strip().upper()
    if not symbol:
        raise HTTPException(status_code=400, detail="Symbol is required")
    result = await get_gateway().quote_with_fallback(symbol)
    return {
        "symbol": result.symbol,
        "price": result.price,
        "change": result.change,
        "change_percent": result.change_percent,
        "source": result.source,
    }


@router.get("/status")
async def market_data_status():
    """Provider chain and where the last prices came from."""
    return get_gateway().get_status()
