"""Day view layout: overlap grouping and column placement of timed events."""

import logging
from datetime import datetime, timedelta, tzinfo
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..services.events import EventDescriptor, TimeInterval
from .coordinates import Day, date_to_y
from .styles import LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.max_x and self.y <= y < self.max_y

    def inset(self, dx: float, dy: float) -> 'Rect':
        """Shrink width and height, keeping the origin."""
        return Rect(self.x, self.y, self.width - dx, self.height - dy)


@dataclass
class LayoutAttributes:
    """An event and the frame the last layout pass assigned to it."""
    descriptor: EventDescriptor
    frame: Optional[Rect] = None

    @property
    def interval(self) -> TimeInterval:
        return self.descriptor.interval


OverlapGroup = List[LayoutAttributes]


def snap_interval(start: datetime, split_minute_interval: int,
                  tz: Optional[tzinfo] = None) -> TimeInterval:
    """
    Bucket of split_minute_interval minutes containing start.

    The bucket begins at start with its minute rounded down to a multiple of
    split_minute_interval, e.g. 09:05 with 30 gives 09:00-09:30. A non-positive
    interval gives a zero-length bucket at start.
    """
    if split_minute_interval <= 0:
        return TimeInterval(start, start)
    minute = (start.astimezone(tz) if tz is not None and start.tzinfo is not None else start).minute
    rounded = (minute // split_minute_interval) * split_minute_interval
    beginning = start - timedelta(minutes=minute - rounded)
    return TimeInterval(beginning, beginning + timedelta(minutes=split_minute_interval))


def _joins_snap_window(group: OverlapGroup, event: LayoutAttributes,
                       config: LayoutConfig, tz: Optional[tzinfo]) -> bool:
    window = snap_interval(group[0].interval.start, config.split_minute_interval, tz)
    candidate = event.interval
    if candidate.contains(window.start):
        return True
    return window.start <= candidate.start < window.end


def _joins_by_overlap(group: OverlapGroup, event: LayoutAttributes, config: LayoutConfig) -> bool:
    candidate = event.interval
    if any(candidate.overlaps(member.interval) for member in group):
        return True

    # Zero gap keeps the legacy behaviour of grouping touching events too
    if config.event_gap <= 0:
        longest = max(group, key=lambda member: member.interval.duration)
        last = group[-1]
        return longest.interval.intersects(candidate) or last.interval.intersects(candidate)
    return False


def group_overlapping_events(attributes: Iterable[LayoutAttributes], config: LayoutConfig,
                             tz: Optional[tzinfo] = None) -> List[OverlapGroup]:
    """
    Partition events into groups that share horizontal space.

    Events are visited in start order; each one either joins the open group
    or closes it and opens a new one.

    Args:
        attributes: Timed (non all-day) events of one day
        config: Layout snapshot; events_will_overlap selects snap-window grouping
        tz: Calendar time zone used to round snap windows

    Returns:
        Groups in start order, members in start order
    """
    sorted_events = sorted(attributes, key=lambda attr: attr.interval.start)

    groups: List[OverlapGroup] = []
    overlapping: OverlapGroup = []

    for event in sorted_events:
        if not overlapping:
            overlapping.append(event)
            continue

        if config.events_will_overlap:
            joins = _joins_snap_window(overlapping, event, config, tz)
        else:
            joins = _joins_by_overlap(overlapping, event, config)

        if joins:
            overlapping.append(event)
            continue

        groups.append(overlapping)
        overlapping = [event]

    if overlapping:
        groups.append(overlapping)
    return groups


def assign_columns(group: OverlapGroup, reference_day: Day, config: LayoutConfig,
                   tz: Optional[tzinfo] = None) -> None:
    """Give each group member an equal-width column and write its frame in place."""
    total_count = len(group)
    equal_width = config.calendar_width / total_count
    for index, event in enumerate(group):
        start_y = date_to_y(event.interval.start, reference_day, config, tz)
        end_y = date_to_y(event.interval.end, reference_day, config, tz)
        x = config.leading_inset + index / total_count * config.calendar_width
        event.frame = Rect(x=x, y=start_y, width=equal_width, height=end_y - start_y)


def recalculate_layout(attributes: Iterable[LayoutAttributes], reference_day: Day,
                       config: LayoutConfig, tz: Optional[tzinfo] = None) -> List[OverlapGroup]:
    """Assign frames to existing attributes, keeping their identity."""
    groups = group_overlapping_events(attributes, config, tz)
    for group in groups:
        assign_columns(group, reference_day, config, tz)
    logger.debug(f"Laid out {sum(len(g) for g in groups)} events in {len(groups)} groups")
    return groups


def compute_layout(descriptors: Iterable[EventDescriptor], reference_day: Day,
                   config: LayoutConfig, tz: Optional[tzinfo] = None) -> List[LayoutAttributes]:
    """
    Compute frames for a day's timed events.

    Args:
        descriptors: Events of the day; all-day events are skipped
        reference_day: Day the timeline renders
        config: Layout snapshot
        tz: Calendar time zone

    Returns:
        LayoutAttributes in start order with frames set
    """
    attributes = []
    for descriptor in descriptors:
        if descriptor.is_all_day:
            logger.debug(f"Skipping all-day event: {descriptor.title}")
            continue
        attributes.append(LayoutAttributes(descriptor))

    groups = recalculate_layout(attributes, reference_day, config, tz)
    return [event for group in groups for event in group]
