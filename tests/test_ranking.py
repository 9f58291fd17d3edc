from faretrack.analytics.ranking import presentation_order, ranking_price, summarize, top_picks
from faretrack.models import Facets, RankedPick
from tests.helpers import both, cheapest


def _routes(make_route):
    return [
        make_route("a", snapshots=[cheapest("d", 500)]),
        make_route("b", snapshots=[both("d", 300, 450)]),
        make_route("c", snapshots=[]),
        make_route("d", snapshots=[cheapest("d", 300)]),
        make_route("e", origin="PVU", snapshots=[both("d", 200, 250)]),
    ]


def test_top_picks_sorted_with_stable_ties(make_route):
    assert top_picks(_routes(make_route), Facets()) == [
        RankedPick("e", 1), RankedPick("b", 2), RankedPick("d", 3),
    ]


def test_top_picks_length_and_idempotence(make_route):
    routes = _routes(make_route)
    assert len(top_picks(routes, Facets(), n=10)) == 4
    assert top_picks(routes, Facets(), n=0) == []
    assert top_picks(routes, Facets()) == top_picks(routes, Facets())


def test_top_picks_only_visible_routes(make_route):
    assert top_picks(_routes(make_route), Facets(origin="SLC"), n=2) == [RankedPick("b", 1), RankedPick("d", 2)]


def test_nonstop_mode_ranks_by_nonstop_price(make_route):
    routes = _routes(make_route)
    assert top_picks(routes, Facets(stop_mode="nonstop")) == [RankedPick("e", 1), RankedPick("b", 2)]
    assert ranking_price(routes[1], Facets(stop_mode="nonstop")) == 450
    assert ranking_price(routes[1], Facets()) == 300


def test_presentation_order_keeps_hidden_routes(make_route):
    routes = _routes(make_route)
    views = presentation_order(routes, Facets(origin="SLC"), n=2)
    assert [v.route.id for v in views] == ["b", "d", "a", "c", "e"]
    assert [v.rank for v in views] == [1, 2, None, None, None]
    assert [v.hidden for v in views] == [False, False, False, False, True]


def test_summary_over_visible_routes(make_route):
    routes = [
        make_route("a", label="Spring", snapshots=[cheapest("1", 250), cheapest("2", 400)]),
        make_route("b", label="Summer", snapshots=[cheapest("1", 420), cheapest("2", 380)]),
        make_route("c", origin="PVU", snapshots=[cheapest("1", 100)]),
    ]
    summary = summarize(routes, Facets(origin="SLC"))
    assert summary.cheapest_route.id == "b"
    assert summary.cheapest_price == 380
    assert summary.lowest_route.id == "a"
    assert summary.lowest_price == 250
    assert summary.dropping == 1
    assert summary.visible == 2


def test_summary_none_without_prices(make_route):
    assert summarize([make_route(snapshots=[])], Facets()) is None


def test_layover_mode_ranking_skips_nonstop_cheapest_fares(make_route):
    routes = [
        make_route("direct", snapshots=[both("d", 150, 150, stops=0)]),
        make_route("one-stop", snapshots=[both("d", 300, 420, stops=1)]),
        make_route("legacy", snapshots=[{"date": "d", "price": 350}]),
    ]
    picks = top_picks(routes, Facets(stop_mode="layover"))
    assert picks == [RankedPick("one-stop", 1), RankedPick("legacy", 2)]
    views = presentation_order(routes, Facets(stop_mode="layover"))
    assert [(v.route.id, v.rank, v.hidden) for v in views] == [
        ("one-stop", 1, False), ("legacy", 2, False), ("direct", None, True),
    ]


def test_presentation_order_keeps_routes_sharing_an_id_apart(make_route):
    first = make_route("dup", label="First", snapshots=[cheapest("d", 500)])
    second = make_route("dup", label="Second", snapshots=[cheapest("d", 200)])
    other = make_route("x", snapshots=[cheapest("d", 300)])
    views = presentation_order([first, other, second], Facets(), n=1)
    assert [v.route.label for v in views] == ["Second", "First", ""]
    assert [v.rank for v in views] == [1, None, None]
    assert top_picks([first, other, second], Facets(), n=1) == [RankedPick("dup", 1)]
