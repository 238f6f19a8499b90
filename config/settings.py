from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: Optional[str] = ""
    ANTHROPIC_API_KEY: Optional[str] = ""

    # Application Settings
    APP_NAME: str = "Radar Scan"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Providers queried during a scan (provider key -> model setting below)
    SCAN_PROVIDERS: list = ["chatgpt", "claude"]

    # Model Settings
    CHATGPT_MODEL: str = "gpt-4o-mini"
    CLAUDE_MODEL: str = "claude-3-5-sonnet-20241022"
    ANALYSIS_MODEL: str = "gpt-4o-mini"  # Mention verification + description accuracy
    QUERY_TEMPERATURE: float = 0.3
    QUERY_MAX_TOKENS: int = 1500
    ANALYSIS_MAX_TOKENS: int = 800

    # Timeouts (seconds)
    QUERY_TIMEOUT: float = 15.0
    CHATGPT_OVERALL_TIMEOUT: float = 45.0
    CLAUDE_OVERALL_TIMEOUT: float = 60.0
    ANALYSIS_TIMEOUT: float = 20.0

    # Retry policy
    MAX_RETRIES: int = 1
    RETRY_DELAY: float = 0.5

    # Scan tiers
    DEFAULT_QUERY_COUNT: int = 12
    MIN_QUERY_COUNT: int = 1
    MAX_QUERY_COUNT: int = 50
    ENHANCED_SCAN_THRESHOLD: int = 15  # query_count above this runs the consensus scan
    CONSENSUS_RUNS: int = 3
    MAX_COMPETITORS: int = 3
    MAX_CATEGORIES: int = 3
    MAX_CUSTOM_QUERIES: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
