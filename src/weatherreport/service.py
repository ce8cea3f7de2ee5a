# orchestration and business rules.
# cities are fetched one at a time, in input order, over a single client
# provides a pure parse function and a fetch_batch coordinator that isolates per-city failures


from __future__ import annotations
import logging
import math
import sys
from typing import Any, Iterable, List, Optional, TextIO
from .models import Unit, Weather
from .client import OpenWeatherClient, ParseError, WeatherAPIError

log = logging.getLogger(__name__)


# transform raw provider payload into our typed value object and check shape
def parse_weather(city: str, unit: Unit, data: Any) -> Weather:
    # openweathermap shape: data["main"]["temp"], data["weather"][0]["description"]
    # anything else in the payload is ignored
    try:
        temperature = float(data["main"]["temp"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError("Unexpected API shape: missing or invalid main.temp") from exc

    if not math.isfinite(temperature):
        raise ParseError(f"Unexpected API shape: non-finite main.temp ({temperature})")

    try:
        description = data["weather"][0]["description"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ParseError("Unexpected API shape: missing weather[0].description") from exc

    if not isinstance(description, str):
        raise ParseError("Unexpected API shape: weather[0].description is not a string")

    return Weather(city=city, temperature=temperature, description=description, unit=unit)


# single city path: fetch -> parse
def fetch_weather(client: OpenWeatherClient, city: str, unit: Unit) -> Weather:
    payload = client.get_current_weather(city, unit)
    return parse_weather(city, unit, payload)


def fetch_batch(
    cities: Iterable[str],
    unit: Unit,
    client: Optional[OpenWeatherClient] = None,
    err: Optional[TextIO] = None,
) -> List[Weather]:
    # a failing city is reported and skipped, the rest of the batch carries on
    owns_client = client is None
    if owns_client:
        client = OpenWeatherClient()

    results: List[Weather] = []
    errors: List[str] = []
    try:
        for city in cities:
            city = city.strip()
            if not city:
                continue
            try:
                results.append(fetch_weather(client, city, unit))
            except WeatherAPIError as exc:
                log.debug("fetch failed for %r: %s", city, exc)
                errors.append(f"Error fetching weather for {city}: {exc}")
    finally:
        if owns_client:
            client.close()

    if errors:
        stream = err if err is not None else sys.stderr
        print("Encountered the following errors:", file=stream)
        for line in errors:
            print(line, file=stream)

    return results
