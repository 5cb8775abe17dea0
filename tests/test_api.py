"""Tests for the HTTP endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from main import app

KHIO = "SPECI KHIO 041114Z 15009KT 10SM -RA BKN014 BKN019 OVC043 09/09 A2940"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def mock_get():
    with patch("services.weather.requests.get") as get:
        response = MagicMock()
        response.status_code = 200
        response.text = KHIO
        get.return_value = response
        yield get


def test_health(client):
    r = client.get("/")

    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_decode(client):
    r = client.post("/decode", json={"raw_metar": KHIO})

    assert r.status_code == 200
    data = r.json()
    assert data["is_valid"] is True
    assert data["error_message"] is None
    assert data["airport_code"] == "KHIO"
    assert data["wind_direction"] == "150"
    assert data["weather_phenomena"] == ["Light rain"]
    assert data["cloud_layers"][0] == {"coverage": "BKN", "altitude_feet": 1400}
    assert data["altimeter_in_hg"] == pytest.approx(29.40)
    assert data["human_readable_summary"].startswith("Broken clouds at 1,400 feet.")


@pytest.mark.parametrize("body", [{"raw_metar": ""}, {"raw_metar": None}, {}])
def test_decode_without_text(client, body):
    r = client.post("/decode", json=body)

    assert r.status_code == 200
    assert r.json()["is_valid"] is False
    assert r.json()["error_message"] == "No METAR data received"


def test_get_metar(client, mock_get):
    r = client.get("/metar/khio")

    assert r.status_code == 200
    assert r.json()["airport_code"] == "KHIO"
    assert r.json()["temperature_celsius"] == 9
    assert mock_get.call_args.kwargs["params"] == {"ids": "KHIO"}


def test_post_metar(client, mock_get):
    r = client.post("/metar", json={"airport_code": "KHIO"})

    assert r.status_code == 200
    assert r.json()["visibility"] == "10 statute miles"


def test_invalid_airport_code_is_reported_in_band(client, mock_get):
    r = client.get("/metar/ABCDEF")

    assert r.status_code == 200
    assert r.json()["is_valid"] is False
    assert "3-4 characters" in r.json()["error_message"]
    mock_get.assert_not_called()


def test_post_metar_requires_code(client):
    assert client.post("/metar", json={}).status_code == 422
