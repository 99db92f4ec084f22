"""
ALLOCATION ENGINE
Convert capital → asset-class amounts for a risk tier

RESPONSIBILITIES:
- Select the tier's percentage template
- Distribute capital across asset classes
- Convert amounts into the display currency (single conversion point)

RULES:
❌ No prices
❌ No network access
✅ Template order preserved (drives chart colouring)
✅ Deterministic output
"""

import logging
from typing import List, Sequence

from invest_advisor.domain.models import AssetAllocation, RiskTolerance
from invest_advisor.domain.services.config_engine import ConfigEngine

logger = logging.getLogger(__name__)


class AllocationEngine:
    """
    Allocation Engine
    Distributes capital across asset classes based on the tier template
    """

    def __init__(self, config_engine: ConfigEngine):
        """
        Initialize allocation engine

        Args:
            config_engine: Loaded configuration holding tier templates
        """
        self.config_engine = config_engine

    def compute_allocation(
        self,
        risk_tolerance: RiskTolerance,
        capital_amount: float
    ) -> List[AssetAllocation]:
        """
        Allocate capital across the tier's asset classes

        Args:
            risk_tolerance: Risk tier selecting the template
            capital_amount: Capital in the profile's base currency

        Returns:
            Allocation slices in template order, amounts in base currency
        """
        if capital_amount <= 0:
            raise ValueError("Capital amount must be positive")

        template = self.config_engine.get_tier(risk_tolerance).allocation_template

        allocations = [
            AssetAllocation(
                name=entry.name,
                percentage=entry.percentage,
                color=entry.color,
                amount=self._calculate_allocation(capital_amount, entry.percentage),
            )
            for entry in template
        ]

        # Verify total allocation
        total_allocated = sum(a.amount for a in allocations)
        if abs(total_allocated - capital_amount) > 0.01:
            logger.warning(
                "Allocation discrepancy for %s: %.2f of %.2f",
                RiskTolerance(risk_tolerance).value, total_allocated, capital_amount,
            )

        return allocations

    @staticmethod
    def convert_allocation(
        allocations: Sequence[AssetAllocation],
        exchange_rate: float
    ) -> List[AssetAllocation]:
        """
        Express allocation amounts in the target currency

        Args:
            allocations: Slices with base-currency amounts
            exchange_rate: Units of target currency per base unit

        Returns:
            New slices; amount = capital * rate * percentage / 100
        """
        if exchange_rate <= 0:
            raise ValueError("Exchange rate must be positive")

        return [
            AssetAllocation(
                name=a.name,
                percentage=a.percentage,
                color=a.color,
                amount=a.amount * exchange_rate,
            )
            for a in allocations
        ]

    @staticmethod
    def _calculate_allocation(
        total_amount: float,
        percentage: int
    ) -> float:
        """
        Calculate allocation amount for a percentage

        Args:
            total_amount: Capital to allocate
            percentage: Allocation percentage (0-100)

        Returns:
            Allocated amount
        """
        return total_amount * percentage / 100
