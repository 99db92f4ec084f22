from invest_advisor.config import Settings
from invest_advisor.infrastructure.market_data.alpha_vantage_provider import AlphaVantageProvider
from invest_advisor.infrastructure.market_data.provider_factory import get_market_data_gateway
from invest_advisor.infrastructure.market_data.yfinance_provider import YFinanceQuoteProvider


def _settings(**overrides):
    values = dict(QUOTE_API_KEY="live-key", HTTP_TIMEOUT_SECONDS=3.0, FALLBACK_EXCHANGE_RATE=82.0)
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_default_chain_is_alpha_vantage(config_engine):
    gateway = get_market_data_gateway(config_engine, _settings())

    providers = gateway.quote_chain.providers
    assert [p.name for p in providers] == ["alpha_vantage"]
    assert isinstance(providers[0].provider, AlphaVantageProvider)
    assert providers[0].provider.api_key == "live-key"
    assert providers[0].provider.timeout_seconds == 3.0
    assert gateway.fallback_rate == 82.0
    assert gateway.exchange_rate_provider.target_currency == "INR"


def test_fallback_providers_and_unknown_names(config_engine, monkeypatch):
    market_data = dict(config_engine.get_app_setting("market_data"))
    market_data["fallback_providers"] = ["yfinance", "bloomberg", "alpha_vantage"]
    monkeypatch.setitem(config_engine._app_config, "market_data", market_data)

    gateway = get_market_data_gateway(config_engine, _settings())

    assert gateway.quote_chain.names == ["alpha_vantage", "yfinance"]
    assert isinstance(gateway.quote_chain.providers[1].provider, YFinanceQuoteProvider)


def test_mock_flag_and_synthetic_table(config_engine):
    gateway = get_market_data_gateway(config_engine, _settings(MOCK_MARKET_DATA=True))
    assert gateway.mock_market_data is True
    assert gateway.synthetic.base_prices["BTC-USD"] == 43250.0
