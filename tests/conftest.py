import asyncio
import random
from pathlib import Path
from typing import AsyncGenerator, Dict, Iterable, Optional

import pytest
from httpx import AsyncClient, ASGITransport

from invest_advisor.domain.models import Quote
from invest_advisor.domain.services.allocation_engine import AllocationEngine
from invest_advisor.domain.services.config_engine import ConfigEngine
from invest_advisor.domain.services.recommendation_composer import RecommendationComposer
from invest_advisor.infrastructure.market_data.gateway import MarketDataGateway
from invest_advisor.infrastructure.market_data.provider_chain import (
    ChainedQuoteProvider,
    NamedProvider,
)
from invest_advisor.infrastructure.market_data.provider_factory import build_synthetic_provider
from invest_advisor.services.session_service import SessionStore
import invest_advisor.main as app_main


CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


# Fake providers for offline tests
class FakeExchangeRateProvider:
    """Returns a fixed rate, None, or raises"""

    def __init__(self, rate: Optional[float] = 82.5, error: Optional[Exception] = None):
        self.rate = rate
        self.error = error
        self.calls = 0

    async def get_exchange_rate(self) -> Optional[float]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.rate


class FakeQuoteProvider:
    """Serves canned quotes; symbols in `failing` raise, unknown symbols return None"""

    def __init__(
        self,
        prices: Optional[Dict[str, float]] = None,
        failing: Iterable[str] = (),
        delays: Optional[Dict[str, float]] = None,
        source: str = "fake",
    ):
        self.prices = prices or {}
        self.failing = set(failing)
        self.delays = delays or {}
        self.source = source
        self.requested = []

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        self.requested.append(symbol)
        delay = self.delays.get(symbol)
        if delay:
            await asyncio.sleep(delay)
        if symbol in self.failing:
            raise ConnectionError(f"provider down for {symbol}")
        price = self.prices.get(symbol)
        if price is None:
            return None
        return Quote(symbol=symbol, price=price, change=1.0, change_percent=0.5, source=self.source)


@pytest.fixture
def config_engine() -> ConfigEngine:
    engine = ConfigEngine(CONFIG_DIR)
    engine.load_all()
    return engine


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def allocation_engine(config_engine) -> AllocationEngine:
    return AllocationEngine(config_engine)


def make_gateway(
    config_engine: ConfigEngine,
    fx_provider=None,
    quote_providers=(),
    rng: Optional[random.Random] = None,
    mock_market_data: bool = False,
) -> MarketDataGateway:
    return MarketDataGateway(
        exchange_rate_provider=fx_provider,
        quote_chain=ChainedQuoteProvider(
            [NamedProvider(p.source, p) for p in quote_providers]
        ),
        synthetic=build_synthetic_provider(
            config_engine.get_app_setting("market_data"), rng=rng or random.Random(7)
        ),
        fallback_rate=83.0,
        mock_market_data=mock_market_data,
    )


@pytest.fixture
def offline_gateway(config_engine, rng) -> MarketDataGateway:
    """Every live source fails: fallback rate and synthetic quotes only"""
    return make_gateway(
        config_engine,
        fx_provider=FakeExchangeRateProvider(rate=None),
        quote_providers=[FakeQuoteProvider()],
        rng=rng,
    )


@pytest.fixture
def composer(config_engine, allocation_engine, offline_gateway) -> RecommendationComposer:
    return RecommendationComposer(
        config_engine=config_engine,
        allocation_engine=allocation_engine,
        gateway=offline_gateway,
    )


@pytest.fixture
def app(monkeypatch, config_engine, allocation_engine, offline_gateway, composer):
    """App with services wired offline; lifespan is not run under ASGITransport"""
    monkeypatch.setattr(app_main, "config_engine", config_engine)
    monkeypatch.setattr(app_main, "allocation_engine", allocation_engine)
    monkeypatch.setattr(app_main, "gateway", offline_gateway)
    monkeypatch.setattr(app_main, "composer", composer)
    monkeypatch.setattr(app_main, "session_store", SessionStore(composer))
    return app_main.create_app()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
