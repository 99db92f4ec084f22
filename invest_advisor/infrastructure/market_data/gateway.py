"""
MARKET DATA GATEWAY
Exchange rate and quotes with total graceful degradation

RULES:
❌ Never raises to the caller
❌ No caching, no retries
✅ FX failure → fixed fallback rate
✅ Quote failure → next provider → synthetic quote
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from invest_advisor.domain.models import FALLBACK_EXCHANGE_RATE, Quote
from invest_advisor.infrastructure.market_data.provider_chain import ChainedQuoteProvider
from invest_advisor.infrastructure.market_data.synthetic_provider import SyntheticQuoteProvider
from invest_advisor.infrastructure.market_data.types import ExchangeRateProvider

logger = logging.getLogger(__name__)


class MarketDataGateway:
    def __init__(
        self,
        exchange_rate_provider: Optional[ExchangeRateProvider],
        quote_chain: ChainedQuoteProvider,
        synthetic: SyntheticQuoteProvider,
        fallback_rate: float = FALLBACK_EXCHANGE_RATE,
        mock_market_data: bool = False,
    ):
        self.exchange_rate_provider = exchange_rate_provider
        self.quote_chain = quote_chain
        self.synthetic = synthetic
        self.fallback_rate = fallback_rate
        self.mock_market_data = mock_market_data

    # ------------------------------------------------------------------
    # EXCHANGE RATE
    # ------------------------------------------------------------------

    async def fetch_exchange_rate(self) -> float:
        """USD→INR rate, or the fallback constant on any failure."""
        if self.mock_market_data or self.exchange_rate_provider is None:
            return self.fallback_rate

        try:
            rate = await self.exchange_rate_provider.get_exchange_rate()
        except Exception:
            logger.exception("Exchange rate lookup failed")
            rate = None

        if rate is None:
            logger.warning(f"Exchange rate unavailable, using fallback {self.fallback_rate}")
            return self.fallback_rate
        return rate

    # ------------------------------------------------------------------
    # QUOTES
    # ------------------------------------------------------------------

    def synthetic_quote(self, symbol: str) -> Quote:
        return self.synthetic.quote(symbol)

    async def fetch_quote(self, symbol: str) -> Quote:
        """First live quote from the chain, else a synthetic one."""
        if not self.mock_market_data:
            try:
                quote = await self.quote_chain.get_quote(symbol)
            except Exception:
                logger.exception(f"Quote chain failed for {symbol}")
                quote = None
            if quote is not None:
                return quote
            logger.info(f"No live quote for {symbol}; using synthetic data")

        return self.synthetic_quote(symbol)

    async def quote_with_fallback(self, symbol: str) -> Quote:
        """
        Quote that can never fail: anything escaping fetch_quote (including
        a broken synthetic generator) degrades to an all-zero quote.
        """
        try:
            return await self.fetch_quote(symbol)
        except Exception:
            logger.exception(f"Quote enrichment failed for {symbol}")
            return Quote.unavailable(symbol)

    def get_status(self) -> Dict[str, object]:
        return {
            "providers": self.quote_chain.names + ["synthetic"],
            "mock_market_data": self.mock_market_data,
            "fallback_rate": self.fallback_rate,
            "last_price_sources": self.quote_chain.get_last_sources(),
        }
