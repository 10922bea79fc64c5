# config.py
"""GTIN Normalizer - Flask Application configuration."""

# Python imports
from os import environ, path

# Third-party imports
from dotenv import load_dotenv

# Local imports

# Load environment variables from .env file
basedir = path.abspath(path.dirname(__file__))
load_dotenv(path.join(basedir, ".env"))


def _env_flag(name, default=False):
    value = environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base config."""

    SECRET_KEY = environ.get("SECRET_KEY")

    GTIN_FOLDER = environ.get("GTIN_FOLDER") or path.join(basedir, "gtin_data")
    GTIN_LOG_FILE = (
        environ.get("GTIN_LOG_FILE")
        or path.join(GTIN_FOLDER, "gtin_normalizer.log")
    )

    # Default for /normalize and `flask gtin-check` when the caller doesn't say.
    GTIN_STRIP_LEADING_ZEROES = _env_flag("GTIN_STRIP_LEADING_ZEROES")


class ProdConfig(Config):
    """Production System Configuration"""

    FLASK_ENV = "production"
    DEBUG = False
    TESTING = False


class DevConfig(Config):
    """Development System Configuration"""

    FLASK_ENV = "development"
    DEBUG = True
    TESTING = True
