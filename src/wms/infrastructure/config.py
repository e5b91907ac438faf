"""Configuration for the warehouse backend.

Values come from the environment (a ``.env`` file is loaded first) and are
exposed as class attributes; ``ENV`` picks the variant.
"""

from dotenv import load_dotenv

load_dotenv()

import os  # noqa: E402
from pathlib import Path  # noqa: E402


class Config:
    """Base configuration."""

    # Storage
    DATA_DIR: Path = Path(os.getenv("WMS_DATA_DIR", "data"))

    # Catalog
    SEARCH_LIMIT: int = int(os.getenv("SEARCH_LIMIT", "20"))
    CATALOG_FILES: list[str] = [
        name.strip()
        for name in os.getenv("CATALOG_FILES", "produkty.csv,produkty2.csv").split(",")
        if name.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "3001"))
    API_DEBUG: bool = os.getenv("API_DEBUG", "false").lower() == "true"

    def validate(self) -> None:
        if self.SEARCH_LIMIT <= 0:
            raise ValueError("SEARCH_LIMIT must be positive")
        if self.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {self.LOG_LEVEL}")


class DevelopmentConfig(Config):
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    API_DEBUG = True


class ProductionConfig(Config):
    API_DEBUG = False


class TestConfig(Config):
    LOG_LEVEL = "WARNING"


def get_config(env: str | None = None) -> Config:
    """Return the configuration for *env* (defaults to ``$ENV``)."""
    if env is None:
        env = os.getenv("ENV", "production").lower()

    if env == "development":
        config: Config = DevelopmentConfig()
    elif env == "test":
        config = TestConfig()
    else:
        config = ProductionConfig()

    config.validate()
    return config
