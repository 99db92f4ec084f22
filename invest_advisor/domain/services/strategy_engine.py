"""
Strategy selection: lump sum vs. systematic investment plan.

Pure threshold rule on (capital, target, period); the exchange rate only
scales the SIP instalment.
"""

import math

from invest_advisor.domain.models import Strategy, StrategyType
from invest_advisor.domain.services.config_engine import StrategyRules


def annualized_return(capital_amount: float, target_growth: float, investment_period: int) -> float:
    """Simple (non-compounded) required return per year, in percent."""
    if capital_amount <= 0:
        raise ValueError("Capital amount must be positive")
    if investment_period <= 0:
        raise ValueError("Investment period must be positive")

    target_return = (target_growth - capital_amount) / capital_amount * 100
    return target_return / investment_period


def monthly_sip_amount(capital_amount: float, exchange_rate: float, investment_period: int) -> int:
    """Capital in target currency spread evenly over every month of the period."""
    # Halves round up (125 for 124.5), not to even
    return math.floor(capital_amount * exchange_rate / (investment_period * 12) + 0.5)


def determine_strategy(
    capital_amount: float,
    target_growth: float,
    investment_period: int,
    exchange_rate: float,
    rules: StrategyRules,
) -> Strategy:
    required = annualized_return(capital_amount, target_growth, investment_period)

    if investment_period > rules.min_period_years and required > rules.sip_return_threshold:
        return Strategy(
            type=StrategyType.SIP,
            rationale=rules.sip_rationale.format(period=investment_period),
            monthly_amount=monthly_sip_amount(capital_amount, exchange_rate, investment_period),
        )

    return Strategy(
        type=StrategyType.LUMP_SUM,
        rationale=rules.lump_sum_rationale,
    )
