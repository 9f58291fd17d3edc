"""Command line entry point: load the tracked routes, apply facets and write the HTML report.

Usage patterns:

1. Render once with every route visible:
   faretrack --data data/flights.json

2. Nonstop fares from Salt Lake City only, mailed when done:
   faretrack --origin SLC --stops nonstop --email

3. Print a search link for custom dates:
   faretrack --search 2024-06-01 2024-06-10 SLC
"""
import argparse
import logging
import time
from datetime import date
from pathlib import Path
from typing import Sequence

import schedule

from faretrack.config import settings
from faretrack.deeplink import ORIGINS, DeepLinkError, build_custom_search_link
from faretrack.emailer import send_email
from faretrack.loader import load_dataset
from faretrack.logging_config import setup_logging
from faretrack.models import ALL, Facets
from faretrack.report import render_report


def run_pipeline(
        facets: Facets,
        data_path: Path | None = None,
        output_html: Path | None = None,
        top_n: int | None = None,
        today: date | None = None,
        email: bool = False,
) -> Path:
    data_path = data_path or settings.data_json
    output_html = output_html or settings.output_html

    dataset = load_dataset(data_path)
    logging.info(f"Rendering report with facets {facets}")
    html = render_report(
        dataset,
        facets,
        top_n=settings.top_picks if top_n is None else top_n,
        today=today,
        window_days=settings.recent_window_days,
        history_points=settings.history_points,
        price_low=settings.price_low,
        price_high=settings.price_high,
    )
    output_html.parent.mkdir(parents=True, exist_ok=True)
    output_html.write_text(html, encoding="utf-8")
    logging.info(f"Output written to {output_html}")

    if email:
        send_email(subject="Flight Tracker", html_body=html)

    return output_html


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Round-trip fare tracker report")
    p.add_argument("--data", type=Path, default=None, help=f"Tracker JSON (default {settings.data_json})")
    p.add_argument("--output", type=Path, default=None, help=f"Output HTML (default {settings.output_html})")
    # Facets
    p.add_argument("--group", default=ALL)
    p.add_argument("--origin", default=ALL)
    p.add_argument("--type", dest="trip_type", default=ALL, help="Trip type label")
    p.add_argument("--stops", choices=["all", "nonstop", "layover"], default=ALL)
    p.add_argument("--airline", default=ALL)
    p.add_argument("--top", type=int, default=None, help="Number of best picks to highlight")
    # Misc
    p.add_argument("--search", nargs=3, metavar=("DEPART", "RETURN", "ORIGIN"),
                   help=f"Print a Google Flights link for custom dates (origins: {', '.join(sorted(ORIGINS))}) and exit")
    p.add_argument("--email", action="store_true", help="Send email if credentials configured")
    p.add_argument("--log-level", default="INFO")
    p.add_argument(
        "--schedule-at",
        metavar="HH:MM",
        default=None,
        help="Re-render the report every day at the given time (e.g. 07:30). "
             "Without this flag the pipeline runs once and exits.",
    )
    return p


def main_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.search:
        depart, return_date, origin = args.search
        try:
            print(build_custom_search_link(depart, return_date, origin))
        except DeepLinkError as e:
            logging.error(f"Cannot build search link: {e}")
            return 2
        return 0

    facets = Facets(
        group=args.group,
        origin=args.origin,
        trip_type=args.trip_type,
        stop_mode=args.stops,
        airline=args.airline,
    )
    pipeline_kwargs = dict(
        facets=facets,
        data_path=args.data,
        output_html=args.output,
        top_n=args.top,
        email=args.email,
    )

    def _run() -> None:
        try:
            run_pipeline(**pipeline_kwargs)
        except Exception:  # noqa: BLE001
            logging.exception("Pipeline failed")

    if args.schedule_at:
        logging.info(f"Scheduler started – report will be rendered every day at {args.schedule_at}")
        _run()
        schedule.every().day.at(args.schedule_at).do(_run)
        while True:
            try:
                schedule.run_pending()
            except Exception:  # noqa: BLE001
                logging.exception("Scheduler error:")
                time.sleep(60 * 60)
            time.sleep(1)
    else:
        try:
            run_pipeline(**pipeline_kwargs)
        except Exception:  # noqa: BLE001
            logging.exception("Pipeline failed")
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
