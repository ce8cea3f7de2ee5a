# min/max reduction over a batch, pure and side-effect free

from __future__ import annotations
from typing import Iterable, Optional
from .models import Weather


def find_highest(records: Iterable[Weather]) -> Optional[Weather]:
    # strict comparison keeps the first record on ties
    best = None
    for w in records:
        if best is None or w.temperature > best.temperature:
            best = w
    return best


def find_lowest(records: Iterable[Weather]) -> Optional[Weather]:
    best = None
    for w in records:
        if best is None or w.temperature < best.temperature:
            best = w
    return best
