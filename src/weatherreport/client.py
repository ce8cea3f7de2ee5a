# OOP boundary for external i/o
# all http/keys/timeouts live here, so parsing and analysis stay pure and testable
# one session per client: the batch fetcher builds one client and reuses its connections

from __future__ import annotations
import logging
import os
from typing import Any, Dict, Optional, Tuple
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from dotenv import find_dotenv, load_dotenv

from .models import Unit

log = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"


class WeatherAPIError(RuntimeError):
    # root of every error raised by this layer
    pass


class MissingAPIKeyError(WeatherAPIError):
    # fatal, nothing can be fetched without a key
    pass


class TransportError(WeatherAPIError):
    # connection refused, dns failure, timeout
    pass


class APIStatusError(WeatherAPIError):
    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"API call failed with code: {status_code}")
        self.status_code = status_code


class CityNotFoundError(APIStatusError):
    def __init__(self, city: str):
        super().__init__(404, "City not found")
        self.city = city


class ParseError(WeatherAPIError):
    # body was not JSON or lacked main.temp / weather[0].description
    pass


def load_api_key(env_file: Optional[str] = None) -> str:
    # .env values never override variables already present in the environment
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not api_key:
        raise MissingAPIKeyError(f"{API_KEY_ENV} not set")
    return api_key


class OpenWeatherClient:
    # encapsulates provider details like base URL, params, auth and timeouts
    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        connect_timeout: float = DEFAULT_TIMEOUT,
        read_timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        user_agent: str = "weather-report/0.1",
    ):
        self.api_key = api_key or load_api_key()
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)
        self.user_agent = user_agent

        # only connection failures are retried, http statuses come back untouched
        self._retry = Retry(
            total=max_retries,
            read=0,
            status=0,
            allowed_methods=("GET",),
            raise_on_status=False,
        )
        self._session = self._build_session()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        })
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "OpenWeatherClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_current_weather(self, city: str, unit: Unit) -> Dict[str, Any]:
        # fetch the current-weather JSON for one city, classifying every failure
        params = {
            "q": city,
            "appid": self.api_key,
            "units": unit.value,
        }

        log.debug("GET %s q=%r units=%s", self.BASE_URL, city, unit.value)
        try:
            resp = self._session.get(self.BASE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            # the exception text may contain the full url, keep the key out of it
            raise TransportError(f"Request error: {type(exc).__name__}") from exc

        if resp.status_code == 404:
            raise CityNotFoundError(city)

        if not 200 <= resp.status_code < 300:
            log.debug("HTTP %s for %r. Body: %s", resp.status_code, city, (resp.text or "")[:300])
            raise APIStatusError(resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc
