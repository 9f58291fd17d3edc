"""HTML rendering of the tracker table.

Consumes the analytics output only; ordering, visibility and ranks are decided before anything gets here.
"""
import logging
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .analytics.filters import available_airlines, available_groups
from .analytics.metrics import DEFAULT_HISTORY_POINTS, DEFAULT_WINDOW_DAYS, compute_metrics
from .analytics.ranking import DEFAULT_TOP_PICKS, presentation_order, summarize
from .deeplink import ORIGINS, DeepLinkError, build_search_link
from .models import Dataset, Facets, NormalizedSnapshot, Route

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'


# ---------------- formatting helpers -----------------
def price_class(price: float | None, low: int = 300, high: int = 550) -> str:
    if not price:
        return ''
    if price <= low:
        return 'price-low'
    return 'price-mid' if price <= high else 'price-high'


def format_price(price: float | None) -> str | None:
    if not price:
        return None
    if price == int(price):
        return f"${price:,.0f}"
    return f"${price:,.2f}"


def stops_label(stops: int | None) -> str:
    if stops is None:
        return ''
    if stops == 0:
        return 'Nonstop'
    if stops == 1:
        return '1 stop'
    return f'{stops} stops'


def type_class(trip_type: str) -> str:
    return 'type-' + ''.join(c if c.isascii() and c.isalnum() else '-' for c in trip_type.lower())


def sparkline_heights(series: Sequence[NormalizedSnapshot]) -> list[int]:
    """Bar heights in px, 3..26, scaled between the lowest and highest price of the strip."""
    if len(series) < 2:
        return []
    prices = [s.price for s in series]
    low = min(prices)
    spread = (max(prices) - low) or 1
    return [max(3, round((p - low) / spread * 24 + 2)) for p in prices]


def format_last_updated(last_updated: str | None) -> str:
    if not last_updated:
        return 'Not yet updated'
    try:
        when = datetime.fromisoformat(last_updated.replace('Z', '+00:00'))
    except ValueError:
        return f'Last updated: {last_updated}'
    return 'Last updated: ' + when.strftime('%a, %b %d, %Y')


def _search_link(route: Route) -> str | None:
    if not route.depart or not route.return_date:
        return None
    try:
        return build_search_link(route.depart, route.return_date, route.origin)
    except DeepLinkError:
        logging.warning("No search link for route %s (origin %s)", route.id, route.origin)
        return None


def _row(route: Route, rank: int | None, hidden: bool, today: date, window_days: int, history_points: int,
         low: int, high: int) -> dict:
    metrics = compute_metrics(route, today=today, window_days=window_days, history_points=history_points)
    latest = metrics.latest
    nonstop = metrics.latest_nonstop
    return {
        'id': route.id,
        'label': route.label,
        'origin': route.origin,
        'type': route.type,
        'type_class': type_class(route.type),
        'group': route.group or '',
        'nights': route.nights,
        'depart': route.depart,
        'return_date': route.return_date,
        'rank': rank,
        'hidden': hidden,
        'price': format_price(latest.price) if latest else None,
        'price_class': price_class(latest.price if latest else None, low, high),
        'airline': latest.airline if latest else '',
        'stops': stops_label(latest.stops) if latest else '',
        'nonstop_price': format_price(nonstop.nonstop_price) if nonstop else None,
        'nonstop_airline': nonstop.nonstop_airline if nonstop else '',
        'recent_low': format_price(metrics.recent_low),
        'all_time_low': format_price(metrics.all_time_low),
        'trend': metrics.trend,
        'sparkline': list(zip(sparkline_heights(metrics.history), metrics.history)),
        'link': _search_link(route),
    }


def render_report(
        dataset: Dataset,
        facets: Facets,
        top_n: int = DEFAULT_TOP_PICKS,
        today: date | None = None,
        window_days: int = DEFAULT_WINDOW_DAYS,
        history_points: int = DEFAULT_HISTORY_POINTS,
        price_low: int = 300,
        price_high: int = 550,
) -> str:
    today = today or date.today()
    routes = dataset.routes
    views = presentation_order(routes, facets, top_n)
    rows = [
        _row(v.route, v.rank, v.hidden, today, window_days, history_points, price_low, price_high)
        for v in views
    ]
    logging.info("Rendering %d routes (%d visible)", len(rows), sum(not v.hidden for v in views))

    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(['html', 'xml', 'html.j2']))
    tpl = env.get_template('tracker_report.html.j2')
    rendered = tpl.render(
        rows=rows,
        summary=summarize(routes, facets),
        facets=facets,
        groups=available_groups(routes),
        airlines=available_airlines(routes, facets),
        origins=sorted(ORIGINS),
        last_updated=format_last_updated(dataset.last_updated),
        format_price=format_price,
    )
    soup = BeautifulSoup(rendered, 'lxml')
    return soup.prettify()
