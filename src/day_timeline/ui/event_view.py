"""Recyclable visual element for a single timed event."""

import textwrap
from typing import Optional

from PIL import ImageDraw, ImageFont

from ..services.events import EventDescriptor
from .layout import Rect
from .styles import ACCENT_LINE_WIDTH, EVENT_FONT_SIZE, LINE_HEIGHT, TEXT_PADDING


class EventView:
    """Draws one event; bound to new content on every layout pass."""

    # Colors that should use black font
    LIGHT_COLORS = {'yellow', 'white'}

    def __init__(self):
        self.descriptor: Optional[EventDescriptor] = None
        self.frame: Optional[Rect] = None

    @property
    def is_bound(self) -> bool:
        return self.descriptor is not None

    def bind(self, descriptor: EventDescriptor, frame: Rect, gap: float = 0) -> None:
        """Attach content and the frame shrunk by the event gap."""
        self.descriptor = descriptor
        self.frame = frame.inset(gap, gap)

    def unbind(self) -> None:
        self.descriptor = None
        self.frame = None

    def get_font_color(self) -> str:
        return 'black' if self.descriptor.color.lower() in self.LIGHT_COLORS else 'white'

    def wrap_title(self) -> list:
        """Split the title into lines fitting the frame width."""
        text_width = self.frame.width - (ACCENT_LINE_WIDTH + 2 * TEXT_PADDING)
        # Approximate character width
        chars_per_line = int(text_width / (EVENT_FONT_SIZE * 0.6))
        if chars_per_line < 1:
            return []
        max_lines = max(1, int((self.frame.height - TEXT_PADDING) // LINE_HEIGHT))
        return textwrap.wrap(self.descriptor.title, width=chars_per_line)[:max_lines]

    def draw(self, draw: ImageDraw.ImageDraw, font: Optional[ImageFont.ImageFont] = None) -> None:
        """Paint background, leading accent line and title."""
        if not self.is_bound or self.frame.width <= 0 or self.frame.height <= 0:
            return

        x0, y0 = self.frame.x, self.frame.y
        x1, y1 = self.frame.max_x, self.frame.max_y
        color = self.descriptor.color

        draw.rectangle([x0, y0, x1, y1], fill=color)
        draw.rectangle([x0, y0, min(x0 + ACCENT_LINE_WIDTH, x1), y1], fill='black')

        current_y = y0 + TEXT_PADDING
        for line in self.wrap_title():
            draw.text((x0 + ACCENT_LINE_WIDTH + TEXT_PADDING, current_y),
                      line, fill=self.get_font_color(), font=font)
            current_y += LINE_HEIGHT
