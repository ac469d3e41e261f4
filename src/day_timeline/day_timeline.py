import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

import pytz
from PIL import Image

from day_timeline.services.events import events_from_payloads, split_all_day
from day_timeline.ui.renderer import TimelineRenderer
from day_timeline.ui.styles import LayoutConfig, load_layout_config
from day_timeline.ui.timeline import Timeline
from day_timeline.ui.coordinates import Day

logger = logging.getLogger(__name__)


class DayTimeline:
    """Turns a day's calendar payloads into a rendered timeline image."""

    def __init__(self, timezone: str = "US/Eastern", config: Optional[LayoutConfig] = None,
                 display_width: Optional[int] = None):
        self.tz = pytz.timezone(timezone)
        config = config or load_layout_config()
        if display_width is not None:
            config = config.with_display_width(display_width)
        self.config = config
        self.renderer = TimelineRenderer()
        self.timeline: Optional[Timeline] = None

    def build_timeline(self, payloads: Iterable[Dict[str, Any]], day: Day,
                       calendar_name: str = 'primary') -> Timeline:
        events = events_from_payloads(payloads, calendar_name, self.tz)
        all_day, regular = split_all_day(events)
        logger.info(f"Laying out {len(regular)} timed events for {day} "
                    f"({len(all_day)} all-day events left to the all-day strip)")

        if self.timeline is None:
            self.timeline = Timeline(day, self.config, self.tz)
        else:
            self.timeline.date = day
        self.timeline.set_events(events)
        return self.timeline

    def generate_image(self, payloads: Iterable[Dict[str, Any]], day: Day,
                       now: Optional[datetime] = None) -> Image.Image:
        timeline = self.build_timeline(payloads, day)
        return self.renderer.render(timeline, now)
