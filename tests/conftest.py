"""Shared pytest fixtures for day_timeline tests."""

from datetime import date, datetime, time, timedelta
from typing import Callable

import pytest

from day_timeline.services.events import EventDescriptor, TimeInterval
from day_timeline.ui.layout import LayoutAttributes
from day_timeline.ui.styles import LayoutConfig

DAY = date(2024, 5, 1)


def at(hhmm: str, days: int = 0) -> datetime:
    """Naive datetime on the test day (shifted by days) at HH:MM."""
    hour, minute = (int(part) for part in hhmm.split(":"))
    return datetime.combine(DAY + timedelta(days=days), time(hour, minute))


@pytest.fixture
def day() -> date:
    return DAY


@pytest.fixture
def config() -> LayoutConfig:
    """Default layout: 10px inset, 50px per hour, 53px gutter, 747px calendar."""
    return LayoutConfig()


@pytest.fixture
def make_event() -> Callable[..., EventDescriptor]:
    def _make(title: str, start: str, end: str, end_days: int = 0, **kwargs) -> EventDescriptor:
        return EventDescriptor(title, TimeInterval(at(start), at(end, end_days)), **kwargs)

    return _make


@pytest.fixture
def make_attributes(make_event) -> Callable[..., LayoutAttributes]:
    def _make(title: str, start: str, end: str, **kwargs) -> LayoutAttributes:
        return LayoutAttributes(make_event(title, start, end, **kwargs))

    return _make
