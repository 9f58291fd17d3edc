"""Top picks, presentation order and the summary strip numbers."""

from collections.abc import Sequence
from .filters import is_visible
from .metrics import all_time_low, latest_nonstop, latest_priced, trend
from ..models import Facets, RankedPick, Route, RouteView, Summary

DEFAULT_TOP_PICKS = 3


def ranking_price(route: Route, facets: Facets) -> float | None:
    """Nonstop fare when the stop-mode facet asks for nonstop, cheapest fare otherwise."""
    if facets.stop_mode == 'nonstop':
        snapshot = latest_nonstop(route)
        return snapshot.nonstop_price if snapshot else None
    snapshot = latest_priced(route)
    return snapshot.price if snapshot else None


def _ranked_positions(routes: Sequence[Route], facets: Facets, n: int) -> list[int]:
    """Dataset positions of the n cheapest visible routes, cheapest first."""
    priced = []
    for position, route in enumerate(routes):
        if not is_visible(route, facets):
            continue
        price = ranking_price(route, facets)
        if price is not None:
            priced.append((price, position))
    # list.sort is stable, equal prices keep dataset order
    priced.sort(key=lambda item: item[0])
    return [position for _, position in priced[:max(n, 0)]]


def top_picks(routes: Sequence[Route], facets: Facets, n: int = DEFAULT_TOP_PICKS) -> list[RankedPick]:
    return [
        RankedPick(route_id=routes[position].id, rank=rank)
        for rank, position in enumerate(_ranked_positions(routes, facets, n), start=1)
    ]


def presentation_order(routes: Sequence[Route], facets: Facets, n: int = DEFAULT_TOP_PICKS) -> list[RouteView]:
    """Ranked routes first in rank order, then every other route in dataset order, hidden ones included."""
    ranks = {position: rank for rank, position in enumerate(_ranked_positions(routes, facets, n), start=1)}
    ordered = list(ranks) + [position for position in range(len(routes)) if position not in ranks]
    return [
        RouteView(route=routes[position], rank=ranks.get(position), hidden=not is_visible(routes[position], facets))
        for position in ordered
    ]


def summarize(routes: Sequence[Route], facets: Facets) -> Summary | None:
    """Headline numbers over the visible routes, None until some visible route has a price."""
    visible = [route for route in routes if is_visible(route, facets)]
    current = [(snap.price, route) for route in visible if (snap := latest_priced(route)) is not None]
    if not current:
        return None
    cheapest_price, cheapest_route = min(current, key=lambda item: item[0])
    lows = [(low, route) for route in visible if (low := all_time_low(route)) is not None]
    lowest_price, lowest_route = min(lows, key=lambda item: item[0]) if lows else (None, None)
    return Summary(
        cheapest_route=cheapest_route,
        cheapest_price=cheapest_price,
        lowest_route=lowest_route,
        lowest_price=lowest_price,
        dropping=sum(1 for route in visible if trend(route) == 'down'),
        visible=len(visible),
    )
