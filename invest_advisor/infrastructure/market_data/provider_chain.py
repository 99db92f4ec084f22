"""
Provider chain - try primary, then fallbacks.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional

from invest_advisor.domain.models import Quote
from invest_advisor.infrastructure.market_data.types import QuoteProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedProvider:
    name: str
    provider: QuoteProvider


class ChainedQuoteProvider:
    def __init__(self, providers: List[NamedProvider], max_tracked_symbols: int = 256):
        self.providers = providers
        self.max_tracked_symbols = max_tracked_symbols
        # Most recently quoted symbols last; oldest dropped past the cap
        self.last_price_sources: "OrderedDict[str, str]" = OrderedDict()

    @property
    def names(self) -> List[str]:
        return [named.name for named in self.providers]

    def get_last_sources(self) -> Dict[str, str]:
        return dict(self.last_price_sources)

    def _record_source(self, symbol: str, name: str) -> None:
        self.last_price_sources[symbol] = name
        self.last_price_sources.move_to_end(symbol)
        while len(self.last_price_sources) > self.max_tracked_symbols:
            self.last_price_sources.popitem(last=False)

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        for named in self.providers:
            try:
                quote = await named.provider.get_quote(symbol)
            except Exception as exc:
                logger.warning(f"{named.name} quote for {symbol} failed: {exc!r}")
                continue
            if quote is not None:
                self._record_source(symbol, named.name)
                return quote
        return None
