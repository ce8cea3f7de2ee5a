# connects input (cities + unit) to the service, prints the result and saves the report.

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from .models import Unit
from .client import OpenWeatherClient, MissingAPIKeyError, load_api_key
from .service import fetch_batch
from .report import DEFAULT_REPORT_FILE, format_analysis, format_weather, write_report

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_IO = 3
EXIT_CONFIG = 4

CITIES_PROMPT = "Enter city names (separated by commas):"
UNIT_PROMPT = "Choose units (metric for Celsius, imperial for Fahrenheit, or standard for Kelvin):"


class InputValidationError(ValueError):
    pass


def parse_cities(line: Optional[str]) -> List[str]:
    cities = [c.strip() for c in (line or "").split(",")]
    cities = [c for c in cities if c]
    if not cities:
        raise InputValidationError("No valid city names entered.")
    return cities


def parse_unit(token: Optional[str]) -> Unit:
    try:
        return Unit.parse(token or "")
    except ValueError as exc:
        raise InputValidationError(
            "Invalid unit. Please use 'metric', 'imperial', or 'standard'."
        ) from exc


def _ask(prompt: str) -> str:
    print(prompt)
    try:
        return input()
    except EOFError:
        return ""


def _setup_logger(verbose: bool) -> None:
    log_formatter = logging.Formatter("%(asctime)s [%(levelname)-5.5s]  %(message)s")
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    pkg_log = logging.getLogger("weatherreport")
    pkg_log.handlers[:] = [console_handler]
    pkg_log.propagate = False
    pkg_log.setLevel(logging.DEBUG if verbose else logging.ERROR)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch current weather for a list of cities and save a text report"
    )
    parser.add_argument("--cities", metavar="CITY[,CITY...]",
                        help="Comma-separated city names. Prompted for when omitted.")
    parser.add_argument("--unit", metavar="UNIT",
                        help="metric, imperial or standard. Prompted for when omitted.")
    parser.add_argument("--output", metavar="FILENAME", default=DEFAULT_REPORT_FILE,
                        help="Report file to write (default: %(default)s)")
    parser.add_argument("--env-file", metavar="FILENAME",
                        help="dotenv file holding OPENWEATHER_API_KEY (default: nearest .env)")
    parser.add_argument("--retries", metavar="N", type=int, default=0,
                        help="Retry a city this many times on connection errors (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log requests and failures to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.retries < 0:
        parser.error("--retries must not be negative")
    _setup_logger(args.verbose)

    try:
        cities_line = args.cities if args.cities is not None else _ask(CITIES_PROMPT)
        cities = parse_cities(cities_line)
        unit_token = args.unit if args.unit is not None else _ask(UNIT_PROMPT)
        unit = parse_unit(unit_token)
    except InputValidationError as exc:
        print(f"Error: {exc}")
        return EXIT_INVALID_INPUT

    try:
        api_key = load_api_key(args.env_file)
    except MissingAPIKeyError as exc:
        print(f"Error: {exc}")
        return EXIT_CONFIG

    log.info("fetching %d cities in %s units", len(cities), unit.value)
    with OpenWeatherClient(api_key=api_key, max_retries=args.retries) as client:
        results = fetch_batch(cities, unit, client=client)

    if not results:
        print("No weather data was retrieved. Please check your city names and try again.")
        return EXIT_OK

    print("\nWeather Data:")
    for w in results:
        print(format_weather(w))

    print("\nAnalysis:")
    for line in format_analysis(results):
        print(line)

    try:
        path = write_report(results, args.output)
    except OSError as exc:
        print(f"Error: {exc}")
        if exc.strerror:
            print(f"Caused by: {exc.strerror} ({exc.filename})")
        return EXIT_IO

    print(f"\nWeather report has been saved to {path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
