"""Application configuration."""
import os
from typing import Optional

# Constants - avoid magic numbers
DEFAULT_SCANNER_TIMEOUT_SECONDS = 300
DEFAULT_LOG_LEVEL = "INFO"


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration."""

    # Storage layout
    DATA_DIR = os.getenv("VST_LIBRARY_DATA_DIR")
    PACKAGED = _env_flag("VST_LIBRARY_PACKAGED")
    USER_DATA_DIR = os.getenv("VST_LIBRARY_USER_DATA_DIR")
    RESOURCES_DIR = os.getenv("VST_LIBRARY_RESOURCES_DIR")

    # Optional SQLAlchemy URL; the database file under DATA_DIR is used when unset
    DATABASE_URL = os.getenv("DATABASE_URL")

    # External scanner
    SCANNER_PATH = os.getenv("VST_SCANNER_PATH")
    SCANNER_TIMEOUT_SECONDS = int(
        os.getenv("SCANNER_TIMEOUT_SECONDS", DEFAULT_SCANNER_TIMEOUT_SECONDS)
    )

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DATABASE_URL = "sqlite://"  # In-memory for tests
    SCANNER_TIMEOUT_SECONDS = 5


class ProductionConfig(Config):
    """Production configuration (the packaged desktop app)."""

    DEBUG = False
    TESTING = False
    PACKAGED = _env_flag("VST_LIBRARY_PACKAGED", default=True)


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: Optional[str] = None) -> type:
    """
    Get configuration based on environment.

    Args:
        env: Environment name (development, testing, production)

    Returns:
        Configuration class
    """
    if env is None:
        env = os.getenv("VST_LIBRARY_ENV", "development")

    return config.get(env, config["default"])
