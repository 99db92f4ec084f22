"""
Alpha Vantage GLOBAL_QUOTE provider.

Response shape:
    {"Global Quote": {"05. price": "175.50", "09. change": "1.20",
                      "10. change percent": "0.6885%"}}
The free tier answers throttled or unknown symbols with an empty record
or a "Note"/"Information" message instead of an HTTP error.
"""

from __future__ import annotations

import logging
from typing import Optional

from invest_advisor.domain.models import Quote
from invest_advisor.infrastructure.market_data.http_client import fetch_json

logger = logging.getLogger(__name__)

PRICE_FIELD = "05. price"
CHANGE_FIELD = "09. change"
CHANGE_PERCENT_FIELD = "10. change percent"


class AlphaVantageProvider:
    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        function: str = "GLOBAL_QUOTE",
        timeout_seconds: float = 10.0,
    ):
        self.api_url = api_url
        self.api_key = (api_key or "").strip() or "demo"
        self.function = function
        self.timeout_seconds = timeout_seconds

    async def _request_json(self, url: str, params: Optional[dict] = None) -> Optional[dict]:
        return await fetch_json(url, params=params, timeout=self.timeout_seconds)

    @staticmethod
    def _parse_number(raw: object) -> float:
        if isinstance(raw, str):
            raw = raw.strip().rstrip("%").strip()
        return float(raw)

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        params = {
            "function": self.function,
            "symbol": symbol,
            "apikey": self.api_key,
        }
        payload = await self._request_json(self.api_url, params=params)
        if not payload:
            return None

        record = payload.get("Global Quote")
        if not record:
            notice = payload.get("Note") or payload.get("Information") or payload.get("Error Message")
            if notice:
                logger.debug(f"Alpha Vantage declined {symbol}: {notice}")
            return None

        try:
            price = self._parse_number(record[PRICE_FIELD])
            change = self._parse_number(record[CHANGE_FIELD])
            change_percent = self._parse_number(record[CHANGE_PERCENT_FIELD])
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug(f"Malformed Alpha Vantage quote for {symbol}: {exc!r}")
            return None

        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            source="alpha_vantage",
        )
