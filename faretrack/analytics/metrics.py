"""Per-route metrics derived from the snapshot history.

Every function re-normalizes ``route.snapshots`` on each call; nothing is cached on the route.
Insertion order of the snapshots is chronological order.
"""
from datetime import date, timedelta

from .normalize import normalize_all
from ..models import NormalizedSnapshot, Route, RouteMetrics, Trend

DEFAULT_WINDOW_DAYS = 7
DEFAULT_HISTORY_POINTS = 14


def _priced(route: Route) -> list[NormalizedSnapshot]:
    return [s for s in normalize_all(route.snapshots) if s.price is not None]


def _snapshot_day(snapshot: NormalizedSnapshot) -> date | None:
    if not isinstance(snapshot.date, str):
        return None
    try:
        return date.fromisoformat(snapshot.date[:10])
    except ValueError:
        return None


def latest_priced(route: Route) -> NormalizedSnapshot | None:
    priced = _priced(route)
    return priced[-1] if priced else None


def latest_nonstop(route: Route) -> NormalizedSnapshot | None:
    nonstop = [s for s in normalize_all(route.snapshots) if s.nonstop_price is not None]
    return nonstop[-1] if nonstop else None


def recent_low(route: Route, window_days: int = DEFAULT_WINDOW_DAYS, today: date | None = None) -> float | None:
    """Lowest price observed on or after ``today - window_days``. Undated snapshots never qualify."""
    cutoff = (today or date.today()) - timedelta(days=window_days)
    prices = [s.price for s in _priced(route) if (day := _snapshot_day(s)) is not None and day >= cutoff]
    return min(prices) if prices else None


def all_time_low(route: Route) -> float | None:
    prices = [s.price for s in _priced(route)]
    return min(prices) if prices else None


def trend(route: Route) -> Trend | None:
    priced = _priced(route)
    if len(priced) < 2:
        return None
    diff = priced[-1].price - priced[-2].price
    if diff < 0:
        return 'down'
    if diff > 0:
        return 'up'
    return 'flat'


def recent_series(route: Route, n: int = DEFAULT_HISTORY_POINTS) -> tuple[NormalizedSnapshot, ...]:
    """Last ``n`` priced snapshots, oldest first. Empty when fewer than two points exist."""
    series = _priced(route)[-n:] if n > 0 else []
    return tuple(series) if len(series) >= 2 else ()


def compute_metrics(
        route: Route,
        today: date | None = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
        history_points: int = DEFAULT_HISTORY_POINTS,
) -> RouteMetrics:
    return RouteMetrics(
        latest=latest_priced(route),
        latest_nonstop=latest_nonstop(route),
        recent_low=recent_low(route, window_days, today),
        all_time_low=all_time_low(route),
        trend=trend(route),
        history=recent_series(route, history_points),
    )
