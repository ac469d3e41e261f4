"""Tests for drawing a timeline with Pillow."""

import pytest
from PIL import ImageDraw, ImageFont

from conftest import DAY, at
from day_timeline.ui.event_view import EventView
from day_timeline.ui.layout import Rect
from day_timeline.ui.renderer import TimelineRenderer
from day_timeline.ui.styles import LayoutConfig
from day_timeline.ui.timeline import Timeline

RED = (255, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def renderer() -> TimelineRenderer:
    return TimelineRenderer()


@pytest.fixture
def timeline(config, make_event) -> Timeline:
    timeline = Timeline(DAY, config)
    timeline.set_events([make_event("Planning", "09:00", "11:00")])
    return timeline


class TestTimelineRenderer:
    def test_image_covers_the_day(self, renderer, timeline) -> None:
        image = renderer.render(timeline)
        assert image.size == (800, 1220)

    def test_event_is_filled_with_its_color(self, renderer, timeline) -> None:
        image = renderer.render(timeline)
        frame = timeline.event_views[0].frame
        center = (int(frame.x + frame.width / 2), int(frame.y + frame.height / 2))
        assert image.getpixel(center) == RED

    def test_empty_space_stays_white(self, renderer, config) -> None:
        image = renderer.render(Timeline(DAY, config))
        assert image.getpixel((700, 35)) == WHITE

    def test_now_line(self, renderer, timeline) -> None:
        image = renderer.render(timeline, now=at("15:00"))
        y = int(timeline.now_y(at("15:00")))
        assert RED in [image.getpixel((700, row)) for row in (y - 1, y, y + 1)]

    def test_now_line_skipped_on_other_days(self, renderer, timeline) -> None:
        image = renderer.render(timeline, now=at("15:00", days=1))
        assert RED not in [image.getpixel((700, row)) for row in (759, 760, 761)]

    def test_gap_leaves_background_between_columns(self, renderer, make_event) -> None:
        timeline = Timeline(DAY, LayoutConfig(event_gap=6))
        timeline.set_events([make_event("A", "09:00", "10:00"), make_event("B", "09:30", "10:30")])
        image = renderer.render(timeline)
        boundary = timeline.regular_layout_attributes[1].frame.x
        assert image.getpixel((int(boundary) - 2, 500)) == WHITE

    def test_font_fallback(self, monkeypatch, timeline) -> None:
        truetype = ImageFont.truetype

        def missing(font=None, *args, **kwargs):
            if font == "DejaVuSans.ttf":
                raise OSError("cannot open resource")
            return truetype(font, *args, **kwargs)

        monkeypatch.setattr(ImageFont, "truetype", missing)
        renderer = TimelineRenderer()
        assert renderer.time_font is None
        assert renderer.render(timeline).size == (800, 1220)

    def test_twelve_hour_clock(self, renderer, make_event) -> None:
        timeline = Timeline(DAY, LayoutConfig(use_24h_clock=False))
        timeline.set_events([make_event("A", "09:00", "10:00")])
        assert renderer.render(timeline, now=at("13:05")).size == (800, 1220)


class TestEventView:
    def test_unbound_view_draws_nothing(self, renderer, config) -> None:
        image = renderer.render(Timeline(DAY, config))
        before = image.tobytes()
        EventView().draw(ImageDraw.Draw(image))
        assert image.tobytes() == before

    def test_title_wraps_to_frame(self, make_event) -> None:
        view = EventView()
        view.bind(make_event("Quarterly planning with the whole team", "09:00", "11:00"),
                  Rect(0, 0, 80, 100))
        lines = view.wrap_title()
        assert len(lines) > 1
        assert " ".join(lines) == "Quarterly planning with the whole team"

    def test_short_frame_limits_lines(self, make_event) -> None:
        view = EventView()
        view.bind(make_event("Quarterly planning with the whole team", "09:00", "09:15"),
                  Rect(0, 0, 80, 12.5))
        assert len(view.wrap_title()) == 1

    def test_light_backgrounds_use_black_text(self, make_event) -> None:
        view = EventView()
        view.bind(make_event("A", "09:00", "10:00", calendar_name="work"), Rect(0, 0, 100, 50))
        assert view.get_font_color() == "black"


class RecordingDraw:
    """Collects text calls; lines are ignored."""

    def __init__(self):
        self.texts = []

    def line(self, *args, **kwargs):
        pass

    def text(self, xy, text, **kwargs):
        self.texts.append((xy, text))


class TestAccentedLabel:
    def test_quarter_hour_label_below_its_hour(self, renderer, timeline) -> None:
        timeline.accented_date = at("14:37")
        draw = RecordingDraw()
        renderer.draw_hour_grid(draw, timeline)
        assert ((2, 10 + 14 * 50 - 7 + 50 * 30 / 60), ":30") in draw.texts

    def test_on_the_hour_adds_nothing(self, renderer, timeline) -> None:
        timeline.accented_date = at("14:10")
        draw = RecordingDraw()
        renderer.draw_hour_grid(draw, timeline)
        assert len(draw.texts) == 25

    def test_no_accent_by_default(self, renderer, timeline) -> None:
        draw = RecordingDraw()
        renderer.draw_hour_grid(draw, timeline)
        assert not [text for _, text in draw.texts if text.startswith(":")]

    def test_hidden_hour_hides_its_accent(self, renderer, timeline) -> None:
        timeline.accented_date = at("15:45")
        draw = RecordingDraw()
        renderer.draw_hour_grid(draw, timeline, now=at("15:05"))
        assert not [text for _, text in draw.texts if text.startswith(":")]
