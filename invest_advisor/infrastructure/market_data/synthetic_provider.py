"""
Synthetic quotes used when no live source answers.
"""

from __future__ import annotations

import random
from typing import Dict, Mapping, Optional

from invest_advisor.domain.models import Quote


class SyntheticQuoteProvider:
    """
    Generates a plausible quote from a per-symbol base price.

    Unknown symbols get a base of ``unknown_base_min + random * unknown_base_span``.
    The percent move is uniform in [-max_change_percent, +max_change_percent]
    and rounded first, so price == round(base * (1 + change_percent / 100), 2)
    holds for the published values.
    """

    def __init__(
        self,
        base_prices: Optional[Mapping[str, float]] = None,
        rng: Optional[random.Random] = None,
        unknown_base_min: float = 100.0,
        unknown_base_span: float = 200.0,
        max_change_percent: float = 3.0,
    ):
        self.base_prices: Dict[str, float] = {
            str(symbol).upper(): float(price) for symbol, price in (base_prices or {}).items()
        }
        self.rng = rng or random.Random()
        self.unknown_base_min = unknown_base_min
        self.unknown_base_span = unknown_base_span
        self.max_change_percent = max_change_percent

    def base_price(self, symbol: str) -> float:
        known = self.base_prices.get(symbol.upper())
        if known:
            return known
        return self.unknown_base_min + self.rng.random() * self.unknown_base_span

    def quote(self, symbol: str) -> Quote:
        base = self.base_price(symbol)
        change_percent = round(self.rng.uniform(-self.max_change_percent, self.max_change_percent), 2)
        change = base * change_percent / 100

        return Quote(
            symbol=symbol,
            price=round(base * (1 + change_percent / 100), 2),
            change=round(change, 2),
            change_percent=change_percent,
            source="synthetic",
        )

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        return self.quote(symbol)
