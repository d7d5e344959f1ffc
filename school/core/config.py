"""Environment-driven settings for the registry.

The store location is resolved once at import, in order: ``DATABASE_URL``,
the properties file named by ``SCHOOL_DB_PROPERTIES``, a local SQLite file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from dotenv import dotenv_values, load_dotenv
from sqlalchemy.engine import URL

ENV_VAR: Final[str] = "SCHOOL_ENV"  # development | testing | production
PROPERTIES_VAR: Final[str] = "SCHOOL_DB_PROPERTIES"
DEFAULT_DATABASE_URI: Final[str] = "sqlite:///school.db"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

# .env is optional; a missing file is ignored
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag such as ``SQLALCHEMY_ECHO=yes``; ``default`` when unset."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int | None = None) -> int | None:
    """Read an integer; ``default`` when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def load_store_properties(path: str | os.PathLike[str]) -> dict[str, str]:
    """Read store connection parameters from a ``KEY=value`` properties file.

    Parameters
    ----------
    path:
        Location of the properties resource.

    Returns
    -------
    dict[str, str]
        Non-empty entries keyed by upper-cased names.

    Raises
    ------
    FileNotFoundError
        When ``path`` does not exist.
    """
    resource = Path(path)
    if not resource.is_file():
        raise FileNotFoundError(f"Store properties not found: {resource}")
    values = dotenv_values(resource)
    return {key.upper(): value for key, value in values.items() if value}


def build_database_uri(properties: Mapping[str, str]) -> str:
    """Build an SQLAlchemy URL from ``DB_*`` properties.

    ``DB_DRIVER`` defaults to ``postgresql+psycopg``. For SQLite drivers only
    ``DB_NAME`` (the database file) is used.
    """
    driver = properties.get("DB_DRIVER", "postgresql+psycopg")
    if driver.startswith("sqlite"):
        return URL.create(driver, database=properties.get("DB_NAME")).render_as_string(
            hide_password=False
        )
    port = properties.get("DB_PORT")
    url = URL.create(
        driver,
        username=properties.get("DB_USER"),
        password=properties.get("DB_PASSWORD"),
        host=properties.get("DB_HOST", "localhost"),
        port=int(port) if port else None,
        database=properties.get("DB_NAME"),
    )
    return url.render_as_string(hide_password=False)


def resolve_database_uri() -> str:
    """Return the store URI: ``DATABASE_URL``, then the properties file, then SQLite."""
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    properties_path = os.getenv(PROPERTIES_VAR)
    if properties_path:
        return build_database_uri(load_store_properties(properties_path))
    return DEFAULT_DATABASE_URI


class BaseConfig:
    """Settings shared by every environment.

    ``SQLALCHEMY_DATABASE_URI``
        Store URI (see :func:`resolve_database_uri`).
    ``LOG_LEVEL``
        Root log level; ``WARNING`` keeps the operator console free of noise.
    ``SEED_GROUPS``, ``SEED_STUDENTS``, ``SEED``
        Size of the generated test data and the random seed (``None`` = random).
    ``ENV_NAME``
        Environment the class configures; destructive commands check it.
    """

    ENV_NAME = "base"

    SQLALCHEMY_DATABASE_URI = resolve_database_uri()
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

    SEED_GROUPS = env_int("SCHOOL_SEED_GROUPS", 10)
    SEED_STUDENTS = env_int("SCHOOL_SEED_STUDENTS", 200)
    SEED = env_int("SCHOOL_SEED")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    ENV_NAME = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """In-memory SQLite (or ``TEST_DATABASE_URL``) and a small, reproducible data set."""

    ENV_NAME = "testing"
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SEED_GROUPS = 3
    SEED_STUDENTS = 40
    SEED = 1337


class ProductionConfig(BaseConfig):
    ENV_NAME = "production"
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Pick the config class named by ``SCHOOL_ENV`` (development when unset or unknown)."""
    return CONFIG_MAP.get(os.getenv(ENV_VAR, "development").strip().lower(), DevelopmentConfig)
