"""Conversions between points in time and vertical timeline offsets."""

import math
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union

from .styles import LayoutConfig

Day = Union[date, datetime]


def _local(instant: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express an instant in the calendar's zone; naive instants are taken as-is."""
    if tz is not None and instant.tzinfo is not None:
        return instant.astimezone(tz)
    return instant


def _calendar_date(day: Day, tz: Optional[tzinfo]) -> date:
    if isinstance(day, datetime):
        return _local(day, tz).date()
    return day


def day_offset(instant: datetime, reference_day: Day, tz: Optional[tzinfo] = None) -> int:
    """Return -1, 0 or 1 as the instant's date is before, on or after the reference day."""
    instant_date = _local(instant, tz).date()
    timeline_date = _calendar_date(reference_day, tz)
    if instant_date > timeline_date:
        # Event ending the next day
        return 1
    if instant_date < timeline_date:
        # Event starting the previous day
        return -1
    return 0


def date_to_y(instant: datetime, reference_day: Day, config: LayoutConfig,
              tz: Optional[tzinfo] = None) -> float:
    """
    Map a point in time to its vertical offset on the reference day's timeline.

    Args:
        instant: Point in time to place
        reference_day: Day the timeline renders
        config: Layout snapshot
        tz: Calendar time zone used to read hour, minute and date

    Returns:
        Offset in pixels from the top of the timeline
    """
    local = _local(instant, tz)
    full_timeline_height = 24 * config.vertical_diff
    hour_y = local.hour * config.vertical_diff + config.vertical_inset
    minute_y = local.minute * config.vertical_diff / 60
    return hour_y + minute_y + full_timeline_height * day_offset(instant, reference_day, tz)


def y_to_date(y: float, reference_day: Day, config: LayoutConfig,
              tz: Optional[tzinfo] = None) -> datetime:
    """
    Map a vertical offset back to a minute-precision point in time.

    Offsets above the first hour resolve to the previous day, offsets below
    the last hour to the next day. A zero hour height collapses every offset
    onto the reference day's midnight.
    """
    time_value = y - config.vertical_inset
    if config.vertical_diff == 0:
        total_minutes = 0
    else:
        # Rounded so values produced by date_to_y land on their own minute
        total_minutes = math.floor(round(time_value * 60 / config.vertical_diff, 6))
    hour, minute = divmod(total_minutes, 60)
    offset, hour = divmod(hour, 24)
    minute = min(max(minute, 0), 59)

    day = _calendar_date(reference_day, tz) + timedelta(days=offset)
    naive = datetime.combine(day, time(hour, minute))

    if tz is None and isinstance(reference_day, datetime):
        tz = reference_day.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, 'localize'):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def full_height(config: LayoutConfig) -> float:
    """Height of a whole day including the top and bottom insets."""
    return config.full_height
