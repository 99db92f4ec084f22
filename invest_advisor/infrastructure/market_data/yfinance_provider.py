"""
YFinance Quote Provider
Yahoo Finance fallback for NSE listings (.NS) and US tickers
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import yfinance as yf

from invest_advisor.domain.models import Quote

logger = logging.getLogger(__name__)


class YFinanceQuoteProvider:
    """
    Yahoo Finance quote provider
    Async-safe via thread offloading
    """

    def __init__(self, history_period: str = "5d", timeout_seconds: float = 10.0):
        self.history_period = history_period
        self.timeout_seconds = timeout_seconds

    async def _history(self, ticker: yf.Ticker, **kwargs):
        """
        Async-safe wrapper around yfinance history(), bounded by the timeout
        """
        return await asyncio.wait_for(
            asyncio.to_thread(ticker.history, **kwargs),
            timeout=self.timeout_seconds,
        )

    @staticmethod
    def _round(value: float) -> float:
        return round(float(value), 2)

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """
        Latest close and its change against the previous close
        """
        ticker = yf.Ticker(symbol)

        # NSE listings often have no intraday bars; daily closes are enough
        hist = await self._history(
            ticker,
            period=self.history_period,
            interval="1d",
            auto_adjust=False
        )

        if hist is None or hist.empty or "Close" not in hist:
            logger.debug(f"No Yahoo price history for {symbol}")
            return None

        closes = hist["Close"].dropna()
        if len(closes) < 2:
            logger.debug(f"Not enough Yahoo closes for {symbol}")
            return None

        close = float(closes.iloc[-1])
        prev_close = float(closes.iloc[-2])
        if close <= 0 or prev_close <= 0:
            return None

        change = close - prev_close
        change_percent = change / prev_close * 100

        return Quote(
            symbol=symbol,
            price=self._round(close),
            change=self._round(change),
            change_percent=self._round(change_percent),
            source="yfinance",
        )
