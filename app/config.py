"""Configuration settings for the Trade Fairness service."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "trade_fairness.db"

    # API Keys
    anthropic_api_key: str = ""

    # Remote item store (PostgREST-style table)
    items_api_url: str = ""
    items_api_key: str = ""

    # HTTP Client Settings
    connect_timeout: float = 10.0
    read_timeout: float = 30.0

    # LLM Settings
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 64
    estimate_currency: str = "INR"

    # Database URL
    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

# Ensure data directory exists
settings.data_dir.mkdir(parents=True, exist_ok=True)
