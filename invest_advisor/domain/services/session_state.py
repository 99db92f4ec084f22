"""
Advisor session state and its reducers.

State is an immutable value; every transition returns a new AdvisorState.
A session holds at most one recommendation: a new result replaces the old.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional

from invest_advisor.domain.models import (
    FALLBACK_EXCHANGE_RATE,
    AnalysisResult,
    InvestmentProfile,
    InvestmentRecommendation,
)


class WizardStep(IntEnum):
    """Wizard pages, in order"""
    PROFILE = 0
    ANALYSIS = 1
    RESULTS = 2


@dataclass(frozen=True)
class AdvisorState:
    profile: Optional[InvestmentProfile] = None
    recommendation: Optional[InvestmentRecommendation] = None
    exchange_rate: float = FALLBACK_EXCHANGE_RATE
    current_step: WizardStep = WizardStep.PROFILE
    is_loading: bool = False


def with_profile(state: AdvisorState, profile: InvestmentProfile) -> AdvisorState:
    """Record submitted inputs; a stale recommendation no longer applies."""
    return replace(
        state,
        profile=profile,
        recommendation=None,
        current_step=WizardStep.ANALYSIS,
    )


def start_analysis(state: AdvisorState) -> AdvisorState:
    if state.profile is None:
        raise ValueError("Cannot analyse without a profile")
    return replace(state, is_loading=True, current_step=WizardStep.ANALYSIS)


def with_result(state: AdvisorState, result: AnalysisResult) -> AdvisorState:
    return replace(
        state,
        recommendation=result.recommendation,
        exchange_rate=result.exchange_rate,
        is_loading=False,
        current_step=WizardStep.RESULTS,
    )


def analysis_failed(state: AdvisorState) -> AdvisorState:
    return replace(state, is_loading=False)


def go_to_step(state: AdvisorState, step: int) -> AdvisorState:
    target = WizardStep(step)
    if target == WizardStep.RESULTS and state.recommendation is None:
        raise ValueError("No recommendation to show yet")
    return replace(state, current_step=target)


def reset(state: AdvisorState) -> AdvisorState:
    """Start over, keeping the last known exchange rate."""
    return AdvisorState(exchange_rate=state.exchange_rate)
