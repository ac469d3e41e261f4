"""Timeline rendering and drawing functionality."""

import math
import logging
from datetime import datetime
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .styles import (
    BACKGROUND_COLOR, SEPARATOR_COLOR, TIME_COLOR, NOW_COLOR,
    FONT_NAME, TIME_FONT_SIZE, EVENT_FONT_SIZE, LABEL_OFFSET, NOW_LINE_WIDTH
)
from .timeline import Timeline

logger = logging.getLogger(__name__)


class TimelineRenderer:
    """Handles the rendering of a day timeline."""

    def __init__(self):
        """Initialize the timeline renderer."""
        self.time_font = None
        self.event_font = None
        self._load_fonts()

    def _load_fonts(self) -> None:
        """Load fonts for timeline display with fallback to default."""
        try:
            self.time_font = ImageFont.truetype(FONT_NAME, TIME_FONT_SIZE)
            self.event_font = ImageFont.truetype(FONT_NAME, EVENT_FONT_SIZE)
        except OSError as e:
            logger.warning(f"Failed to load custom fonts: {e}. Using default fonts.")
            self.time_font = None
            self.event_font = None

    def image_size(self, timeline: Timeline) -> tuple:
        width = max(1, math.ceil(timeline.config.leading_inset + timeline.calendar_width))
        height = max(1, math.ceil(timeline.full_height))
        return width, height

    def render(self, timeline: Timeline, now: Optional[datetime] = None) -> Image.Image:
        """Draw hour grid, events and the current time indicator."""
        image = Image.new('RGB', self.image_size(timeline), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(image)

        self.draw_hour_grid(draw, timeline, now)
        for view in timeline.event_views:
            view.draw(draw, self.event_font)
        if now is not None:
            self.draw_now_line(draw, timeline, now)
        return image

    def draw_hour_grid(self, draw: ImageDraw.ImageDraw, timeline: Timeline,
                       now: Optional[datetime] = None) -> None:
        """Draw a separator line and a label for every hour."""
        config = timeline.config
        width = config.leading_inset + timeline.calendar_width
        hour_to_remove = timeline.hidden_hour_label(now) if now is not None else None
        accented = timeline.accented_time()

        for hour, label in enumerate(timeline.time_labels):
            y = config.vertical_inset + hour * config.vertical_diff
            draw.line([config.leading_inset, y, width, y], fill=SEPARATOR_COLOR, width=1)

            if hour == hour_to_remove:
                continue
            draw.text((2, y - LABEL_OFFSET), label, fill=TIME_COLOR, font=self.time_font)

            if accented is None or accented[0] != hour or accented[1] == 0:
                continue
            minute = accented[1]
            accent_y = y - LABEL_OFFSET + config.vertical_diff * minute / 60
            draw.text((2, accent_y), f":{minute}", fill=TIME_COLOR, font=self.time_font)

    def draw_now_line(self, draw: ImageDraw.ImageDraw, timeline: Timeline, now: datetime) -> None:
        y = timeline.now_y(now)
        if y is None:
            return
        width = timeline.config.leading_inset + timeline.calendar_width
        draw.line([timeline.config.leading_inset, y, width, y], fill=NOW_COLOR, width=NOW_LINE_WIDTH)
        if timeline.tz is not None and now.tzinfo is not None:
            now = now.astimezone(timeline.tz)
        label = now.strftime('%H:%M' if timeline.config.use_24h_clock else '%-I:%M')
        draw.text((2, y - LABEL_OFFSET), label, fill=NOW_COLOR, font=self.time_font)
