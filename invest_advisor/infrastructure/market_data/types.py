"""
Market data provider protocols for type hints.
"""

from __future__ import annotations

from typing import Optional, Protocol

from invest_advisor.domain.models import Quote


class QuoteProvider(Protocol):
    async def get_quote(self, symbol: str) -> Optional[Quote]:
        ...


class ExchangeRateProvider(Protocol):
    async def get_exchange_rate(self) -> Optional[float]:
        ...
