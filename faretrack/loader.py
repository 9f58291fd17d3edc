"""Dataset loading.

Reads the tracker JSON ``{"lastUpdated": ..., "routes": [...]}`` into immutable models. A load failure
never propagates: it is logged and an empty dataset is returned so the report still renders.
"""
import json
import logging
from pathlib import Path

import dacite

from .models import Dataset, Route

_CONFIG = dacite.Config(strict=True)


def _route_data(raw: dict) -> dict:
    data_to_parse = dict(
        id=str(raw['id']),
        origin=raw['origin'],
        type=raw['type'],
        label=raw.get('label') or '',
        group=raw.get('group') or None,
        nights=raw.get('nights'),
        depart=raw.get('depart'),
        return_date=raw.get('return'),
        snapshots=tuple(raw.get('snapshots') or ()),
    )
    return data_to_parse


def parse_dataset(payload: dict) -> Dataset:
    routes = tuple(
        dacite.from_dict(data=_route_data(raw), data_class=Route, config=_CONFIG)
        for raw in payload.get('routes') or ()
    )
    return Dataset(last_updated=payload.get('lastUpdated'), routes=routes)


def load_dataset(path: Path) -> Dataset:
    try:
        with open(path, 'rt', encoding='utf-8') as f:
            payload = json.load(f)
        dataset = parse_dataset(payload)
    except (OSError, ValueError, KeyError, TypeError, AttributeError, dacite.DaciteError):
        logging.exception("Could not load price data from %s, using an empty dataset", path)
        return Dataset()
    logging.info("Loaded %d routes from %s (last updated %s)", len(dataset.routes), path, dataset.last_updated)
    return dataset
