# Inspired by https://github.com/databricks-solutions/brickhouse-brands-demo/blob/main/backend/app/auth.py
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Remote record API
    catalog_api_url: Optional[str] = None
    catalog_api_key: Optional[str] = None
    catalog_collection: str = "products2"
    request_timeout: float = 30.0

    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"
    data_backend: Literal["rest", "local"] = "local"

    # Data paths (local backend only)
    data_dir: str = "sample_data"

    # UI settings
    page_size: int = 4
    search_debounce_ms: int = 700
    low_stock_threshold: int = 10
    placeholder_image_url: str = "https://via.placeholder.com/300"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
