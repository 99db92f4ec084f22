"""
Exchange rate provider backed by exchangerate-api.com.

Response shape: {"base": "USD", "rates": {"INR": 83.12, ...}}
"""

from __future__ import annotations

import logging
from typing import Optional

from invest_advisor.infrastructure.market_data.http_client import fetch_json

logger = logging.getLogger(__name__)


class ExchangeRateApiProvider:
    def __init__(
        self,
        api_url: str,
        target_currency: str = "INR",
        timeout_seconds: float = 10.0,
    ):
        self.api_url = api_url
        self.target_currency = target_currency.upper()
        self.timeout_seconds = timeout_seconds

    async def _request_json(self, url: str, params: Optional[dict] = None) -> Optional[dict]:
        return await fetch_json(url, params=params, timeout=self.timeout_seconds)

    async def get_exchange_rate(self) -> Optional[float]:
        payload = await self._request_json(self.api_url)
        if not payload:
            return None

        rates = payload.get("rates")
        if not isinstance(rates, dict):
            logger.debug("Exchange rate payload has no rates table")
            return None

        raw = rates.get(self.target_currency)
        try:
            rate = float(raw)
        except (TypeError, ValueError):
            logger.debug(f"Unusable {self.target_currency} rate: {raw!r}")
            return None

        if rate <= 0:
            return None
        return rate
