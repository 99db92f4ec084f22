"""
Synthetic portfolio trajectory for the results chart.
"""

import random
from typing import Optional, Sequence

from invest_advisor.domain.models import AssetAllocation, HistoricalData

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

BASE_VALUE = 1000
MONTHLY_STEP = 150
NOISE = 100


def generate_series(
    allocation: Sequence[AssetAllocation],
    rng: Optional[random.Random] = None,
) -> HistoricalData:
    """
    Build a 12-point series: value i = round(1000 + i*150 + uniform(-100, 100)).

    The allocation is accepted for call-site compatibility but not read;
    the series is a placeholder, not a backtest of the recommendation.
    """
    rng = rng or random.Random()
    data = tuple(
        round(BASE_VALUE + index * MONTHLY_STEP + rng.uniform(-NOISE, NOISE))
        for index in range(len(MONTHS))
    )
    return HistoricalData(labels=MONTHS, data=data)
