"""Snapshot normalization.

Raw records come in two shapes and are resolved here, once, into ``NormalizedSnapshot``:

* legacy:  ``{"date": ..., "price": 412}``
* current: ``{"date": ..., "cheapest": {"price", "airline", "stops"}, "nonstop": {"price", "airline"}}``

Either sub-record of the current shape may be missing. Anything else is "no data" and maps to None.
"""
from collections.abc import Iterable, Mapping
from typing import Any

from ..models import NormalizedSnapshot


def _price(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if value > 0 else None


def _airline(value: Any) -> str:
    return value if isinstance(value, str) else ''


def _stops(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _sub_record(value: Any) -> Mapping | None:
    return value if isinstance(value, Mapping) else None


def normalize(raw: Mapping | None) -> NormalizedSnapshot | None:
    if not isinstance(raw, Mapping):
        return None
    cheapest = _sub_record(raw.get('cheapest'))
    nonstop = _sub_record(raw.get('nonstop'))
    if cheapest is not None or nonstop is not None:
        cheapest = cheapest or {}
        nonstop = nonstop or {}
        return NormalizedSnapshot(
            date=raw.get('date'),
            price=_price(cheapest.get('price')),
            airline=_airline(cheapest.get('airline')),
            stops=_stops(cheapest.get('stops')),
            nonstop_price=_price(nonstop.get('price')),
            nonstop_airline=_airline(nonstop.get('airline')),
        )
    price = _price(raw.get('price'))
    if price is not None:
        return NormalizedSnapshot(date=raw.get('date'), price=price, airline='', stops=None,
                                  nonstop_price=None, nonstop_airline='')
    return None


def normalize_all(raw_snapshots: Iterable[Mapping | None]) -> list[NormalizedSnapshot]:
    """Normalize a route's history keeping insertion order and dropping records without data."""
    return [s for s in map(normalize, raw_snapshots) if s is not None]
