"""
FastAPI Main Application
Wires configuration, market data and the advisory engines
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pathlib import Path
import logging
from typing import AsyncGenerator

from invest_advisor.config import settings
from invest_advisor.core.logging import setup_logging
from invest_advisor.domain.services.config_engine import ConfigEngine, DEFAULT_CONFIG_DIR
from invest_advisor.domain.services.allocation_engine import AllocationEngine
from invest_advisor.domain.services.recommendation_composer import RecommendationComposer
from invest_advisor.infrastructure.market_data.gateway import MarketDataGateway
from invest_advisor.infrastructure.market_data.provider_factory import get_market_data_gateway
from invest_advisor.services.session_service import SessionStore
from invest_advisor.api.routes import advisor, config as config_routes, health, market_data, sessions

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Global instances
config_engine: ConfigEngine | None = None
allocation_engine: AllocationEngine | None = None
gateway: MarketDataGateway | None = None
composer: RecommendationComposer | None = None
session_store: SessionStore | None = None


def build_services(config_dir: Path | None = None) -> None:
    """Load configuration and construct every engine."""
    global config_engine, allocation_engine, gateway, composer, session_store

    config_dir = Path(config_dir or settings.CONFIG_DIR or DEFAULT_CONFIG_DIR)
    logger.info(f"⚙️  Loading configuration from {config_dir}")
    config_engine = ConfigEngine(config_dir)
    config_engine.load_all()
    logger.info(f"✅ Configuration loaded (strategy version {config_engine.strategy_version})")

    allocation_engine = AllocationEngine(config_engine)
    gateway = get_market_data_gateway(config_engine, settings)
    composer = RecommendationComposer(
        config_engine=config_engine,
        allocation_engine=allocation_engine,
        gateway=gateway,
        domestic_suffix=settings.DOMESTIC_SYMBOL_SUFFIX,
        analysis_delay_seconds=settings.ANALYSIS_DELAY_SECONDS,
    )
    session_store = SessionStore(composer, max_sessions=settings.MAX_SESSIONS)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    """
    logger.info("🚀 Starting Investment Profile Advisor")
    build_services()
    logger.info(f"✅ Ready ({settings.APP_ENV})")
    yield
    logger.info("🛑 Investment Profile Advisor stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Investment Profile Advisor",
        description="Risk-tier portfolio recommendations with live market prices",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(advisor.router, prefix="/api/v1/advisor", tags=["Advisor"])
    app.include_router(sessions.router, prefix="/api/v1/sessions", tags=["Sessions"])
    app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])
    app.include_router(config_routes.router, prefix="/api/v1/config", tags=["Config"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "invest_advisor.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
