# shared helpers, tests never hit the network (requests_mock fixture comes from the requests-mock plugin)

import json
from pathlib import Path

import pytest

from weatherreport.client import OpenWeatherClient

DATA_DIR = Path(__file__).parent / "data"
BASE_URL = OpenWeatherClient.BASE_URL


def payload(temp, description="clear sky"):
    # minimal provider body, only the fields the parser reads
    return {"main": {"temp": temp}, "weather": [{"description": description}]}


def city_url(city):
    return f"{BASE_URL}?q={city}"


@pytest.fixture
def london_payload():
    return json.loads((DATA_DIR / "london.json").read_text(encoding="utf-8"))


@pytest.fixture
def client():
    with OpenWeatherClient(api_key="test-key") as c:
        yield c
