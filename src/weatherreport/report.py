# text rendering shared by the console output and the persisted report

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Sequence, Union
from .models import Weather
from .analysis import find_highest, find_lowest

log = logging.getLogger(__name__)

DEFAULT_REPORT_FILE = "weather_report.txt"
REPORT_HEADER = "Weather Report"


def format_weather(w: Weather) -> str:
    # three labelled lines, newline terminated
    return (
        f"City: {w.city}\n"
        f"Temperature: {w.temperature_with_unit()}\n"
        f"Description: {w.description}\n"
    )


def format_analysis(records: Sequence[Weather]) -> List[str]:
    highest = find_highest(records)
    lowest = find_lowest(records)
    if highest is None or lowest is None:
        return []
    return [
        f"- City with the highest temperature: {highest.city} ({highest.temperature_with_unit()})",
        f"- City with the lowest temperature: {lowest.city} ({lowest.temperature_with_unit()})",
    ]


def render_report(records: Sequence[Weather]) -> str:
    parts = [f"{REPORT_HEADER}\n\n"]
    for w in records:
        parts.append(format_weather(w))
        parts.append("\n")
    parts.append("\nAnalysis:\n")
    for line in format_analysis(records):
        parts.append(line + "\n")
    return "".join(parts)


def write_report(records: Sequence[Weather], path: Union[str, Path] = DEFAULT_REPORT_FILE) -> Path:
    # overwrites any previous report; the with block closes the file on every path
    target = Path(path)
    content = render_report(records)
    with target.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(content)
    log.debug("wrote %d bytes to %s", len(content.encode("utf-8")), target)
    return target
