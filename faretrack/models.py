from dataclasses import dataclass, field
from typing import Any, Literal

StopMode = Literal["all", "nonstop", "layover"]
Trend = Literal["down", "up", "flat"]

ALL = "all"


@dataclass(frozen=True, slots=True)
class Route:
    """A tracked origin / date-range / trip-length combination.

    snapshots keep the raw price records exactly as loaded, oldest first, including null or malformed
    entries (the normalizer drops those). Two shapes occur:
    legacy ``{date, price}`` and ``{date, cheapest: {price, airline, stops}, nonstop: {price, airline}}``.
    Nothing derived is ever stored here; metrics are recomputed from snapshots on every query.
    """
    id: str
    origin: str
    type: str
    label: str = ""
    group: str | None = None
    nights: int | None = None
    depart: str | None = None
    return_date: str | None = None
    snapshots: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Dataset:
    last_updated: str | None = None
    routes: tuple[Route, ...] = ()


@dataclass(frozen=True, slots=True)
class NormalizedSnapshot:
    """Canonical price record. stops is None when unknown, which is not the same as 0."""
    date: str | None
    price: float | None
    airline: str
    stops: int | None
    nonstop_price: float | None
    nonstop_airline: str


@dataclass(frozen=True, slots=True)
class Facets:
    group: str = ALL
    origin: str = ALL
    trip_type: str = ALL
    stop_mode: StopMode = ALL
    airline: str = ALL


@dataclass(frozen=True, slots=True)
class RouteMetrics:
    latest: NormalizedSnapshot | None
    latest_nonstop: NormalizedSnapshot | None
    recent_low: float | None
    all_time_low: float | None
    trend: Trend | None
    history: tuple[NormalizedSnapshot, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class RankedPick:
    route_id: str
    rank: int


@dataclass(frozen=True, slots=True)
class RouteView:
    """One row of the presentation order. Hidden routes stay in the list with hidden=True."""
    route: Route
    rank: int | None
    hidden: bool


@dataclass(frozen=True, slots=True)
class Summary:
    cheapest_route: Route
    cheapest_price: float
    lowest_route: Route | None
    lowest_price: float | None
    dropping: int
    visible: int
