from unittest.mock import MagicMock

import pytest
import requests

from storage import ResultStore


def make_response(payload=None, status=200):
    """requests.Response stand-in; non-2xx raises from raise_for_status."""
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    return resp


@pytest.fixture
def store(tmp_path):
    return ResultStore(str(tmp_path / "test_results.db"))


@pytest.fixture
def client(tmp_path):
    from app import app
    app.config["TESTING"] = True
    app.config["DATABASE_PATH"] = str(tmp_path / "test_app.db")
    app.config["DEFAULT_REQUESTED_BY"] = "farmer-123"
    app.extensions.pop("result_store", None)
    with app.test_client() as c:
        yield c
