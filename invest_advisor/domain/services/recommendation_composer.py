"""
RECOMMENDATION COMPOSER
Profile → complete portfolio recommendation

RESPONSIBILITIES:
- Fetch the exchange rate
- Compute the asset allocation (target currency)
- Enrich tier securities with quotes, concurrently
- Choose lump sum vs. SIP
- Attach risk assessment and process guide

RULES:
❌ Never fails for a valid profile
❌ One symbol's failure never aborts the batch
✅ Output order follows the tier tables, not fetch completion
"""

import asyncio
import logging
from typing import List, Sequence

from invest_advisor.domain.models import (
    AnalysisResult,
    InvestmentProfile,
    InvestmentRecommendation,
    Quote,
    RiskAssessment,
    SecurityTemplate,
    SpecificRecommendation,
)
from invest_advisor.domain.services.allocation_engine import AllocationEngine
from invest_advisor.domain.services.config_engine import ConfigEngine
from invest_advisor.domain.services.strategy_engine import determine_strategy
from invest_advisor.infrastructure.market_data.gateway import MarketDataGateway

logger = logging.getLogger(__name__)


class RecommendationComposer:
    """
    Recommendation Composer
    Single entry point for portfolio analysis
    """

    def __init__(
        self,
        config_engine: ConfigEngine,
        allocation_engine: AllocationEngine,
        gateway: MarketDataGateway,
        domestic_suffix: str = ".NS",
        analysis_delay_seconds: float = 0.0,
    ):
        self.config_engine = config_engine
        self.allocation_engine = allocation_engine
        self.gateway = gateway
        self.domestic_suffix = domestic_suffix.upper()
        self.analysis_delay_seconds = analysis_delay_seconds

    def is_domestic(self, symbol: str) -> bool:
        """Domestic listings are already priced in the target currency"""
        return symbol.upper().endswith(self.domestic_suffix)

    async def analyze(self, profile: InvestmentProfile) -> AnalysisResult:
        """
        Build the recommendation for a profile

        Args:
            profile: Validated investor inputs

        Returns:
            Recommendation plus the exchange rate it was priced with
        """
        if self.analysis_delay_seconds > 0:
            await asyncio.sleep(self.analysis_delay_seconds)

        tier = self.config_engine.get_tier(profile.risk_tolerance)
        logger.info(
            f"Analysing {tier.tier.value} profile: capital={profile.capital_amount}"
            f" period={profile.investment_period}y target={profile.target_growth}"
        )

        exchange_rate = await self.gateway.fetch_exchange_rate()

        base_allocation = self.allocation_engine.compute_allocation(
            profile.risk_tolerance,
            profile.capital_amount,
        )
        asset_allocation = self.allocation_engine.convert_allocation(base_allocation, exchange_rate)

        specific = await self._enrich_securities(tier.securities, exchange_rate)

        strategy = determine_strategy(
            capital_amount=profile.capital_amount,
            target_growth=profile.target_growth,
            investment_period=profile.investment_period,
            exchange_rate=exchange_rate,
            rules=self.config_engine.strategy_rules,
        )

        recommendation = InvestmentRecommendation(
            asset_allocation=tuple(asset_allocation),
            specific_recommendations=tuple(specific),
            strategy=strategy,
            process_guide=self.config_engine.process_guide,
            risk_assessment=RiskAssessment(
                score=tier.score,
                description=tier.description,
            ),
        )

        logger.info(
            f"Recommendation ready: strategy={strategy.type.value} rate={exchange_rate}"
            f" securities={len(specific)}"
        )
        return AnalysisResult(recommendation=recommendation, exchange_rate=exchange_rate)

    # ------------------------------------------------------------------
    # SECURITIES
    # ------------------------------------------------------------------

    async def _enrich_securities(
        self,
        securities: Sequence[SecurityTemplate],
        exchange_rate: float,
    ) -> List[SpecificRecommendation]:
        """Fan out one quote per security; gather keeps template order"""
        results = await asyncio.gather(
            *(self.gateway.quote_with_fallback(security.symbol) for security in securities),
            return_exceptions=True,
        )

        enriched = []
        for security, result in zip(securities, results):
            if isinstance(result, Exception):
                logger.error(f"Price enrichment failed for {security.symbol}: {result!r}")
                result = Quote.unavailable(security.symbol)
            enriched.append(self._to_recommendation(security, result, exchange_rate))
        return enriched

    def _to_recommendation(
        self,
        security: SecurityTemplate,
        quote: Quote,
        exchange_rate: float,
    ) -> SpecificRecommendation:
        if self.is_domestic(security.symbol):
            price_in_inr = quote.price
        else:
            price_in_inr = quote.price * exchange_rate

        return SpecificRecommendation(
            symbol=security.symbol,
            name=security.name,
            sector=security.sector,
            allocation=security.allocation,
            rationale=security.rationale,
            current_price=quote.price,
            price_change=quote.change,
            price_change_percent=quote.change_percent,
            price_in_inr=price_in_inr,
            price_source=quote.source,
        )
