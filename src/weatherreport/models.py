# value objects shared by the fetcher, the analyzer and the cli

from __future__ import annotations
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class Unit(str, Enum):
    # the value is sent as the provider's "units" query parameter
    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, token: str) -> "Unit":
        # accepts user input like " Metric " but nothing outside the enum
        normalized = (token or "").strip().lower()
        for unit in cls:
            if unit.value == normalized:
                return unit
        raise ValueError(f"Unknown unit {token!r}")

    def __str__(self) -> str:
        return self.value


_SYMBOLS = {
    Unit.METRIC: "°C",
    Unit.IMPERIAL: "°F",
    Unit.STANDARD: "K",
}


@dataclass(frozen=True)
class Weather:
    # immutable observation for one city, temperature is in the unit's scale
    city: str
    temperature: float
    description: str
    unit: Unit

    def __post_init__(self):
        if not self.city:
            raise ValueError("Weather.city must be a non-empty string")
        if not math.isfinite(self.temperature):
            raise ValueError(f"Weather.temperature must be finite (got {self.temperature})")

    def temperature_with_unit(self) -> str:
        # half-up on the shortest decimal form, so 287.15 reads 287.2 rather than 287.1
        rounded = Decimal(repr(self.temperature)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{rounded:f}{self.unit.symbol}"
