from __future__ import annotations

from datetime import date

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.core.clock import FixedClock

TODAY = date(2025, 3, 10)  # a Monday


@pytest.fixture()
def app():
    flask_app = create_app(clock=FixedClock(TODAY))
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
