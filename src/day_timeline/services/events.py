"""Event data for the day timeline and conversion from calendar payloads."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple
from dataclasses import dataclass

import pytz

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeInterval:
    """A closed span of time between two instants."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Interval ends before it starts: {self.start} > {self.end}")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def intersects(self, other: 'TimeInterval') -> bool:
        """Closed intersection, so touching intervals intersect."""
        return self.start <= other.end and other.start <= self.end

    def overlaps(self, other: 'TimeInterval') -> bool:
        """
        True overlap: the intervals share interior time.

        Touching intervals (one ends exactly when the other starts) and
        zero-length intervals never overlap anything.
        """
        if self.is_degenerate or other.is_degenerate:
            return False
        if self.start == other.end or self.end == other.start:
            return False
        return self.start < other.end and self.end > other.start


@dataclass(eq=False)
class EventDescriptor:
    """Represents a single calendar event placed on the timeline."""
    title: str
    interval: TimeInterval
    is_all_day: bool = False
    calendar_name: str = 'primary'

    # Default colors for different calendars
    CALENDAR_COLORS = {
        'primary': 'red',
        'other_google': 'blue',
        'holidays': 'green',
        'birthdays': 'orange',
        'work': 'yellow',
    }

    @property
    def start(self) -> datetime:
        return self.interval.start

    @property
    def end(self) -> datetime:
        return self.interval.end

    @property
    def color(self) -> str:
        """Get the color for this event based on its calendar."""
        return self.CALENDAR_COLORS.get(self.calendar_name, 'blue')


def parse_event_datetime(value: str) -> Tuple[datetime, bool]:
    """
    Parse a payload datetime string and determine if it's an all-day value.

    Args:
        value: ISO format datetime ("2024-05-01T09:00:00Z") or date ("2024-05-01")

    Returns:
        Tuple of (datetime, is_all_day)

    Raises:
        ValueError: If the string is not ISO formatted
    """
    if 'T' in value:  # Has time component
        dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt, False

    # All-day value - use midnight UTC
    day = date.fromisoformat(value)
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc), True


def event_from_payload(payload: Dict[str, Any], calendar_name: str = 'primary',
                       tz: Optional[pytz.BaseTzInfo] = None) -> EventDescriptor:
    """Convert a Google Calendar style event dict to an EventDescriptor."""
    start = payload['start'].get('dateTime', payload['start'].get('date'))
    end = payload['end'].get('dateTime', payload['end'].get('date'))

    start_dt, is_all_day = parse_event_datetime(start)
    end_dt, _ = parse_event_datetime(end)

    if tz is not None and not is_all_day:
        start_dt = start_dt.astimezone(tz)
        end_dt = end_dt.astimezone(tz)

    return EventDescriptor(
        title=payload.get('summary', ''),
        interval=TimeInterval(start_dt, end_dt),
        is_all_day=is_all_day,
        calendar_name=calendar_name
    )


def events_from_payloads(payloads: Iterable[Dict[str, Any]], calendar_name: str = 'primary',
                         tz: Optional[pytz.BaseTzInfo] = None) -> List[EventDescriptor]:
    """
    Convert a batch of event payloads, skipping entries that cannot be parsed.

    Args:
        payloads: Raw event dicts
        calendar_name: Friendly name of the calendar the events belong to
        tz: Time zone the timed events are converted to

    Returns:
        List of EventDescriptor objects in payload order
    """
    events = []
    for payload in payloads:
        try:
            events.append(event_from_payload(payload, calendar_name, tz))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            summary = payload.get('summary', '?') if isinstance(payload, dict) else '?'
            logger.warning(f"Skipping malformed event {summary!r}: {e}")
    logger.info(f"Parsed {len(events)} events from calendar: {calendar_name}")
    return events


def split_all_day(descriptors: Iterable[EventDescriptor]) -> Tuple[List[EventDescriptor], List[EventDescriptor]]:
    """Separate all-day events from the ones placed on the time axis."""
    all_day, regular = [], []
    for descriptor in descriptors:
        (all_day if descriptor.is_all_day else regular).append(descriptor)
    return all_day, regular
