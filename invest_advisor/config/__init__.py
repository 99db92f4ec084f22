"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "*"

    # Directory holding the YAML tier tables (defaults to <repo>/config)
    CONFIG_DIR: str = ""

    # ======================
    # Exchange Rate
    # ======================
    FX_API_URL: str = "https://api.exchangerate-api.com/v4/latest/USD"
    BASE_CURRENCY: str = "USD"
    TARGET_CURRENCY: str = "INR"
    FALLBACK_EXCHANGE_RATE: float = 83.0

    # ======================
    # Quotes
    # ======================
    QUOTE_API_URL: str = "https://www.alphavantage.co/query"
    QUOTE_API_KEY: str = "demo"
    DOMESTIC_SYMBOL_SUFFIX: str = ".NS"

    # ======================
    # HTTP
    # ======================
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # ======================
    # Flags
    # ======================
    MOCK_MARKET_DATA: bool = False
    # Optional pause before an analysis returns; 0 disables it
    ANALYSIS_DELAY_SECONDS: float = 0.0

    # ======================
    # Sessions
    # ======================
    MAX_SESSIONS: int = 1000

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )


settings = Settings()
