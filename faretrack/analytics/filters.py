"""Facet filtering.

Facets arrive as an explicit immutable value on every call; the current selection lives with the caller.
"""
from collections.abc import Iterable

from .metrics import latest_nonstop, latest_priced
from ..models import ALL, Facets, Route


def route_airlines(route: Route) -> set[str]:
    """Airlines on the latest cheapest fare and the latest nonstop fare."""
    airlines = set()
    latest = latest_priced(route)
    nonstop = latest_nonstop(route)
    if latest and latest.airline:
        airlines.add(latest.airline)
    if nonstop and nonstop.nonstop_airline:
        airlines.add(nonstop.nonstop_airline)
    return airlines


def _passes_stop_mode(route: Route, stop_mode: str) -> bool:
    if stop_mode == 'nonstop':
        return latest_nonstop(route) is not None
    if stop_mode == 'layover':
        # Only the cheapest fare's stop count matters here, a tracked nonstop fare does not.
        latest = latest_priced(route)
        return latest is not None and latest.stops != 0
    return True


def matches_base_facets(route: Route, facets: Facets) -> bool:
    """Group, origin, trip type and stop mode. The airline facet is left out."""
    if facets.group != ALL and route.group != facets.group:
        return False
    if facets.origin != ALL and route.origin != facets.origin:
        return False
    if facets.trip_type != ALL and route.type != facets.trip_type:
        return False
    return _passes_stop_mode(route, facets.stop_mode)


def is_visible(route: Route, facets: Facets) -> bool:
    if not matches_base_facets(route, facets):
        return False
    return facets.airline == ALL or facets.airline in route_airlines(route)


def available_airlines(routes: Iterable[Route], facets: Facets) -> list[str]:
    """Airlines worth offering in the selector: those present on routes passing the non-airline facets."""
    airlines: set[str] = set()
    for route in routes:
        if matches_base_facets(route, facets):
            airlines |= route_airlines(route)
    return sorted(airlines)


def available_groups(routes: Iterable[Route]) -> list[str]:
    return sorted({route.group for route in routes if route.group})
