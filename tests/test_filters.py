from faretrack.analytics.filters import (
    available_airlines,
    available_groups,
    is_visible,
    matches_base_facets,
    route_airlines,
)
from faretrack.models import Facets
from tests.helpers import both, cheapest


def test_wildcards_show_everything(make_route):
    assert is_visible(make_route(snapshots=[]), Facets())


def test_exact_match_facets(make_route):
    route = make_route(origin="PVU", type="Long weekend", group="Family", snapshots=[cheapest("a", 300)])
    assert is_visible(route, Facets(origin="PVU", trip_type="Long weekend", group="Family"))
    assert not is_visible(route, Facets(origin="SLC"))
    assert not is_visible(route, Facets(trip_type="Week"))
    assert not is_visible(route, Facets(group="Friends"))


def test_ungrouped_route_hidden_by_group_facet(make_route):
    assert not is_visible(make_route(group=None), Facets(group="Family"))


def test_nonstop_mode_requires_nonstop_fare(make_route):
    without = make_route(snapshots=[cheapest("a", 150, stops=0)])
    with_nonstop = make_route(snapshots=[both("a", 300, 400)])
    facets = Facets(stop_mode="nonstop")
    assert not is_visible(without, facets)
    assert is_visible(with_nonstop, facets)


def test_layover_mode_excludes_nonstop_cheapest_even_with_nonstop_fare(make_route):
    route = make_route(snapshots=[both("a", 300, 300, stops=0)])
    assert not is_visible(route, Facets(stop_mode="layover"))


def test_layover_mode_accepts_unknown_or_positive_stops(make_route):
    facets = Facets(stop_mode="layover")
    assert is_visible(make_route(snapshots=[{"date": "a", "price": 300}]), facets)
    assert is_visible(make_route(snapshots=[cheapest("a", 300, stops=2)]), facets)
    assert not is_visible(make_route(snapshots=[]), facets)


def test_layover_mode_uses_latest_cheapest_snapshot(make_route):
    route = make_route(snapshots=[cheapest("a", 300, stops=1), cheapest("b", 280, stops=0)])
    assert not is_visible(route, Facets(stop_mode="layover"))


def test_route_airlines_union_of_latest_fares(make_route):
    route = make_route(snapshots=[
        both("a", 300, 400, airline="United", nonstop_airline="Frontier"),
        both("b", 310, 420, airline="Delta", nonstop_airline="Southwest"),
    ])
    assert route_airlines(route) == {"Delta", "Southwest"}
    assert route_airlines(make_route(snapshots=[{"date": "a", "price": 300}])) == set()


def test_airline_facet(make_route):
    route = make_route(snapshots=[both("a", 300, 400, airline="Delta", nonstop_airline="Southwest")])
    assert is_visible(route, Facets(airline="Southwest"))
    assert not is_visible(route, Facets(airline="United"))


def test_airline_facet_not_part_of_base_facets(make_route):
    route = make_route(snapshots=[cheapest("a", 300, airline="Delta")])
    assert matches_base_facets(route, Facets(airline="United"))


def test_available_airlines_follow_other_facets_only(make_route):
    routes = [
        make_route("r1", origin="SLC", snapshots=[cheapest("a", 300, airline="Delta")]),
        make_route("r2", origin="PVU", snapshots=[both("a", 300, 350, airline="Allegiant", nonstop_airline="Breeze")]),
        make_route("r3", origin="SLC", snapshots=[both("a", 280, 330, airline="United", nonstop_airline="Frontier")]),
    ]
    assert available_airlines(routes, Facets()) == ["Allegiant", "Breeze", "Delta", "Frontier", "United"]
    assert available_airlines(routes, Facets(origin="SLC", airline="Delta")) == ["Delta", "Frontier", "United"]
    assert available_airlines(routes, Facets(stop_mode="nonstop")) == ["Allegiant", "Breeze", "Frontier", "United"]


def test_available_groups(make_route):
    routes = [make_route("a", group="Friends"), make_route("b"), make_route("c", group="Family"),
              make_route("d", group="Friends")]
    assert available_groups(routes) == ["Family", "Friends"]
