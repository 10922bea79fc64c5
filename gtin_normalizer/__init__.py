# /__init__.py

# Python Imports
import os
import logging
from importlib import metadata
from pathlib import Path

# Third party imports
import toml
from flask import Flask, request
from dotenv import load_dotenv

# Local imports
from gtin_normalizer.barcode import (
    BarcodeFormat,
    ConversionInvariantError,
    GTINError,
    Identification,
    InvalidPrefixError,
    Normalization,
    calculate_check_digit,
    calculate_ean13_check_digit,
    calculate_itf14_check_digit,
    calculate_upc12_check_digit,
    identify_barcode_type,
    is_valid_ean13,
    is_valid_itf14,
    is_valid_upc12,
    itf14_to_ean13,
    normalize_as_ean13,
    normalize_with_info,
    upc12_to_ean13,
    validate_barcode,
)

_PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def log_message(message):
    """Helper function to prefix Log message with the source IP address"""
    source_ip = (
        request.headers.get("X-Forwarded-For", request.remote_addr or "-")
        .split(",")[0]
        .strip()
    )
    return f"[IP: {source_ip}] {message}"


def get_version():
    """Get the version of the application.

    Read from pyproject.toml in a checkout, from the installed distribution otherwise.
    """
    if not _PYPROJECT.exists():
        try:
            return metadata.version("gtin-normalizer")
        except metadata.PackageNotFoundError:
            return "unknown"
    with open(_PYPROJECT, "r") as f:
        pyproject_data = toml.load(f)
    return pyproject_data["project"]["version"]


def create_app(config_object=None):
    """Build the Flask application.

    ``config_object`` defaults to the APP_MODE environment variable
    (e.g. "config.DevConfig").
    """
    app = Flask(__name__)

    ##################################
    ### Load Flask Run Mode
    ### Configuration based
    ### on environment
    ### (Production, Development)
    ##################################
    load_dotenv("./.env", verbose=True)
    app.config.from_object(config_object or os.environ["APP_MODE"])

    ##################################
    ### Logging Setup
    ##################################
    os.makedirs(app.config["GTIN_FOLDER"], exist_ok=True)
    logging.basicConfig(
        filename=app.config["GTIN_LOG_FILE"],
        level=logging.INFO,
        format="%(asctime)s %(levelname)s : %(message)s",
    )
    app.logger.info(f"GTIN Normalizer log file: {app.config['GTIN_LOG_FILE']}")

    ##################################
    ### Routing Blueprint Setup
    ##################################
    from gtin_normalizer.error_pages.handlers import error_pages
    from gtin_normalizer.web_scan.views import web_scan
    from gtin_normalizer.cli import gtin_check

    app.register_blueprint(error_pages)
    app.register_blueprint(web_scan)
    app.cli.add_command(gtin_check)

    return app


__all__ = [
    "BarcodeFormat",
    "ConversionInvariantError",
    "GTINError",
    "Identification",
    "InvalidPrefixError",
    "Normalization",
    "calculate_check_digit",
    "calculate_ean13_check_digit",
    "calculate_itf14_check_digit",
    "calculate_upc12_check_digit",
    "create_app",
    "get_version",
    "identify_barcode_type",
    "is_valid_ean13",
    "is_valid_itf14",
    "is_valid_upc12",
    "itf14_to_ean13",
    "normalize_as_ean13",
    "normalize_with_info",
    "upc12_to_ean13",
    "validate_barcode",
]
