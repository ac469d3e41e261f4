"""Timeline styling, visual constants and layout configuration."""

import os
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Layout constants
VERTICAL_INSET: float = 10     # Space above 00:00 and below 24:00
VERTICAL_DIFF: float = 50      # Height of one hour
LEADING_INSET: float = 53      # Width of the hour label gutter
DISPLAY_WIDTH: int = 800
SPLIT_MINUTE_INTERVAL: int = 15

# Drawing constants
ACCENT_LINE_WIDTH: int = 3
TEXT_PADDING: int = 4
LINE_HEIGHT: int = 14
NOW_LINE_WIDTH: int = 2
LABEL_OFFSET: int = 7          # Labels are drawn centered on their hour line
ACCENT_SNAP_MINUTES: int = 15  # Editing snaps the accented time to quarter hours

# Colors
BACKGROUND_COLOR: str = 'white'
SEPARATOR_COLOR: str = '#cccccc'
TIME_COLOR: str = '#666666'
NOW_COLOR: str = 'red'

# Font sizes
FONT_NAME: str = "DejaVuSans.ttf"
TIME_FONT_SIZE: int = 11
EVENT_FONT_SIZE: int = 12

CONFIG_ENV_PREFIX = 'TIMELINE_'


@dataclass(frozen=True)
class LayoutConfig:
    """Snapshot of the values a layout pass reads."""
    vertical_inset: float = VERTICAL_INSET
    vertical_diff: float = VERTICAL_DIFF
    leading_inset: float = LEADING_INSET
    event_gap: float = 0
    split_minute_interval: int = SPLIT_MINUTE_INTERVAL
    events_will_overlap: bool = False
    calendar_width: float = DISPLAY_WIDTH - LEADING_INSET
    use_24h_clock: bool = True

    @property
    def full_height(self) -> float:
        return self.vertical_inset * 2 + self.vertical_diff * 24

    def with_display_width(self, display_width: float) -> 'LayoutConfig':
        """Return a copy whose calendar fills the display right of the label gutter."""
        return replace(self, calendar_width=display_width - self.leading_inset)


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ('1', 'true', 'yes', 'on'):
        return True
    if value in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


_PARSERS: Dict[type, Callable[[str], Any]] = {
    float: float,
    int: int,
    bool: _parse_bool,
}


def load_layout_config(prefix: str = CONFIG_ENV_PREFIX, base: Optional[LayoutConfig] = None) -> LayoutConfig:
    """
    Load layout overrides from environment variables (and a .env file).

    Each field maps to an upper-cased variable, e.g. vertical_diff reads
    TIMELINE_VERTICAL_DIFF.

    Args:
        prefix: Environment variable prefix
        base: Configuration the overrides are applied to

    Returns:
        LayoutConfig with all overrides applied

    Raises:
        RuntimeError: If a variable is set but cannot be parsed
    """
    load_dotenv()
    base = base or LayoutConfig()

    overrides = {}
    for field in fields(LayoutConfig):
        key = f"{prefix}{field.name.upper()}"
        raw = os.getenv(key)
        if raw is None:
            continue
        parser = _PARSERS[field.type]
        try:
            overrides[field.name] = parser(raw)
        except ValueError as e:
            raise RuntimeError(f"Invalid value for {key}: {e}")

    if overrides:
        logger.info(f"Loaded {len(overrides)} layout overrides: {sorted(overrides)}")
    return replace(base, **overrides)
