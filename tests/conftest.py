from datetime import date

import pytest

from faretrack.models import Route


@pytest.fixture
def today() -> date:
    return date(2024, 1, 10)


@pytest.fixture
def make_route():
    """Factory fixture for routes; snapshots are passed as raw dicts."""

    def _make(route_id: str = "r1", snapshots: list | tuple = (), origin: str = "SLC", type: str = "Week",
              group: str | None = None, **kwargs) -> Route:
        return Route(id=route_id, origin=origin, type=type, group=group, snapshots=tuple(snapshots), **kwargs)

    return _make
