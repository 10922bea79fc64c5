import os
import sys
from pathlib import Path

import pytest


# Ensure the project root (repo folder) is importable when running pytest.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _clear_module(name: str) -> None:
    if name in sys.modules:
        del sys.modules[name]


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    """Create a Flask app configured to use a temp folder for logs.

    config.py reads environment variables at import time, so it is reloaded
    after the environment is set.
    """

    data_dir = tmp_path_factory.mktemp("gtin_data")

    os.environ["APP_MODE"] = "config.DevConfig"
    os.environ["SECRET_KEY"] = "test-secret-key"

    # Force temp persistence so tests never touch the developer's real log.
    os.environ["GTIN_FOLDER"] = str(data_dir)
    os.environ["GTIN_LOG_FILE"] = str(Path(data_dir) / "test.log")
    os.environ["GTIN_STRIP_LEADING_ZEROES"] = "false"

    _clear_module("config")

    from gtin_normalizer import create_app  # noqa: E402

    return create_app()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()
