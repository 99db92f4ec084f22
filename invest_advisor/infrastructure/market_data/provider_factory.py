"""
Market data gateway factory (config-driven).
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from invest_advisor.config import Settings, settings as default_settings
from invest_advisor.domain.services.config_engine import ConfigEngine
from invest_advisor.infrastructure.market_data.alpha_vantage_provider import AlphaVantageProvider
from invest_advisor.infrastructure.market_data.exchange_rate_provider import ExchangeRateApiProvider
from invest_advisor.infrastructure.market_data.gateway import MarketDataGateway
from invest_advisor.infrastructure.market_data.provider_chain import (
    ChainedQuoteProvider,
    NamedProvider,
)
from invest_advisor.infrastructure.market_data.synthetic_provider import SyntheticQuoteProvider
from invest_advisor.infrastructure.market_data.types import QuoteProvider
from invest_advisor.infrastructure.market_data.yfinance_provider import YFinanceQuoteProvider

logger = logging.getLogger(__name__)


def _build_provider(name: str, app_config: Dict, settings: Settings) -> QuoteProvider:
    name = (name or "").lower()
    if name == "alpha_vantage":
        av_cfg = app_config.get("alpha_vantage", {})
        return AlphaVantageProvider(
            api_url=settings.QUOTE_API_URL,
            api_key=settings.QUOTE_API_KEY,
            function=av_cfg.get("function", "GLOBAL_QUOTE"),
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    if name == "yfinance":
        yf_cfg = app_config.get("yfinance", {})
        return YFinanceQuoteProvider(
            history_period=yf_cfg.get("history_period", "5d"),
            timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
        )
    raise ValueError(f"Unknown quote provider: {name}")


def build_synthetic_provider(app_config: Dict, rng: Optional[random.Random] = None) -> SyntheticQuoteProvider:
    synthetic_cfg = app_config.get("synthetic", {})
    return SyntheticQuoteProvider(
        base_prices=synthetic_cfg.get("base_prices", {}),
        rng=rng,
        unknown_base_min=float(synthetic_cfg.get("unknown_base_min", 100)),
        unknown_base_span=float(synthetic_cfg.get("unknown_base_span", 200)),
        max_change_percent=float(synthetic_cfg.get("max_change_percent", 3)),
    )


def get_market_data_gateway(
    config_engine: ConfigEngine,
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
) -> MarketDataGateway:
    settings = settings or default_settings
    app_config = config_engine.get_app_setting("market_data")
    provider_name = app_config.get("provider", "alpha_vantage")
    fallback_names = app_config.get("fallback_providers") or []

    providers: List[NamedProvider] = []
    for name in [provider_name, *fallback_names]:
        name = (name or "").lower()
        if not name or name in [p.name for p in providers]:
            continue
        try:
            providers.append(NamedProvider(name, _build_provider(name, app_config, settings)))
        except ValueError as exc:
            logger.warning(f"Skipping quote provider: {exc}")

    exchange_rate_provider = ExchangeRateApiProvider(
        api_url=settings.FX_API_URL,
        target_currency=settings.TARGET_CURRENCY,
        timeout_seconds=settings.HTTP_TIMEOUT_SECONDS,
    )

    logger.info(
        f"Market data chain: {[p.name for p in providers] + ['synthetic']}"
        f" (mock={settings.MOCK_MARKET_DATA})"
    )

    return MarketDataGateway(
        exchange_rate_provider=exchange_rate_provider,
        quote_chain=ChainedQuoteProvider(providers),
        synthetic=build_synthetic_provider(app_config, rng=rng),
        fallback_rate=settings.FALLBACK_EXCHANGE_RATE,
        mock_market_data=settings.MOCK_MARKET_DATA,
    )
