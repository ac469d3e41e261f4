"""Per-day timeline state shared by the renderer and pointer handling."""

import logging
from datetime import datetime, tzinfo
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..services.events import EventDescriptor
from .coordinates import Day, date_to_y, day_offset, y_to_date
from .event_view import EventView
from .layout import LayoutAttributes, recalculate_layout
from .pool import ReusePool
from .styles import ACCENT_SNAP_MINUTES, LayoutConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineHit:
    """Result of a tap or long press: either an event or a point in time."""
    event: Optional[EventDescriptor] = None
    date: Optional[datetime] = None


def make_24h_labels() -> List[str]:
    return [f"{hour % 24:02d}:00" for hour in range(25)]


def make_12h_labels() -> List[str]:
    labels = []
    for hour in range(25):
        hour = hour % 24
        if hour == 12:
            labels.append("Noon")
        else:
            suffix = "AM" if hour < 12 else "PM"
            labels.append(f"{hour % 12 or 12} {suffix}")
    return labels


class Timeline:
    """Lays out one day's events and keeps the views bound to them."""

    def __init__(self, date: Day, config: Optional[LayoutConfig] = None,
                 tz: Optional[tzinfo] = None,
                 view_factory: Callable[[], EventView] = EventView):
        self.date = date
        self.config = config or LayoutConfig()
        self.tz = tz
        self.pool: ReusePool[EventView] = ReusePool(view_factory)
        self.event_views: List[EventView] = []
        self.regular_layout_attributes: List[LayoutAttributes] = []
        self.all_day_layout_attributes: List[LayoutAttributes] = []
        self.accented_date: Optional[datetime] = None
        self._labels_key: Optional[bool] = None
        self._labels: List[str] = []

    @property
    def layout_attributes(self) -> List[LayoutAttributes]:
        return self.all_day_layout_attributes + self.regular_layout_attributes

    @layout_attributes.setter
    def layout_attributes(self, attributes: List[LayoutAttributes]) -> None:
        self.all_day_layout_attributes = []
        self.regular_layout_attributes = []
        for attribute in attributes:
            if attribute.descriptor.is_all_day:
                self.all_day_layout_attributes.append(attribute)
            else:
                self.regular_layout_attributes.append(attribute)

        self.recalculate_event_layout()
        self.prepare_event_views()

    def set_events(self, descriptors: List[EventDescriptor]) -> None:
        self.layout_attributes = [LayoutAttributes(descriptor) for descriptor in descriptors]

    @property
    def full_height(self) -> float:
        return self.config.full_height

    @property
    def calendar_width(self) -> float:
        return self.config.calendar_width

    def update_config(self, config: LayoutConfig) -> None:
        """Swap the layout snapshot; frames and bindings are recomputed."""
        self.config = config
        self.recalculate_event_layout()
        self.bind_event_views()

    def recalculate_event_layout(self) -> None:
        recalculate_layout(self.regular_layout_attributes, self.date, self.config, self.tz)

    def prepare_event_views(self) -> None:
        """Recycle the previous pass's views and take one per timed event."""
        self.pool.enqueue(self.event_views)
        self.event_views = [self.pool.dequeue() for _ in self.regular_layout_attributes]
        self.bind_event_views()
        logger.debug(f"Prepared {len(self.event_views)} event views "
                     f"({self.pool.created_count} created in total)")

    def bind_event_views(self) -> None:
        for view, attributes in zip(self.event_views, self.regular_layout_attributes):
            view.bind(attributes.descriptor, attributes.frame, self.config.event_gap)

    def prepare_for_reuse(self) -> None:
        for view in self.event_views:
            view.unbind()
        self.pool.enqueue(self.event_views)
        self.event_views = []

    def date_to_y(self, instant: datetime) -> float:
        return date_to_y(instant, self.date, self.config, self.tz)

    def y_to_date(self, y: float) -> datetime:
        return y_to_date(y, self.date, self.config, self.tz)

    @property
    def first_event_y_position(self) -> Optional[float]:
        frames = [attr.frame for attr in self.regular_layout_attributes if attr.frame is not None]
        if not frames:
            return None
        first_event_position = min(frame.y for frame in frames)
        beginning_of_day_position = self.config.vertical_inset
        return max(first_event_position, beginning_of_day_position)

    def find_event_view(self, x: float, y: float) -> Optional[EventView]:
        for view in self.event_views:
            if view.frame is not None and view.frame.contains(x, y):
                return view
        return None

    def hit_test(self, x: float, y: float) -> TimelineHit:
        """Resolve a pointer location to the event under it or to a time."""
        view = self.find_event_view(x, y)
        if view is not None:
            return TimelineHit(event=view.descriptor)
        return TimelineHit(date=self.y_to_date(y))

    @property
    def time_labels(self) -> List[str]:
        key = self.config.use_24h_clock
        if key != self._labels_key:
            self._labels = make_24h_labels() if self.config.use_24h_clock else make_12h_labels()
            self._labels_key = key
        return self._labels

    def accented_time(self) -> Optional[Tuple[int, int]]:
        """Hour and minute of accented_date, snapped down to the accent interval."""
        if self.accented_date is None:
            return None
        local = self.accented_date
        if self.tz is not None and local.tzinfo is not None:
            local = local.astimezone(self.tz)
        minute = (local.minute // ACCENT_SNAP_MINUTES) * ACCENT_SNAP_MINUTES
        return local.hour, minute

    def is_today(self, now: datetime) -> bool:
        return day_offset(now, self.date, self.tz) == 0

    def now_y(self, now: datetime) -> Optional[float]:
        if not self.is_today(now):
            return None
        return self.date_to_y(now)

    def hidden_hour_label(self, now: datetime) -> Optional[int]:
        """Hour whose label the now indicator would cover, if any."""
        if not self.is_today(now):
            return None
        local = now.astimezone(self.tz) if self.tz is not None and now.tzinfo is not None else now
        if local.minute > 39:
            return local.hour + 1
        if local.minute < 21:
            return local.hour
        return None
