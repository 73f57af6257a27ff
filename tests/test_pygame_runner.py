import pytest

pygame = pytest.importorskip("pygame")

from pygame_runner import screen_to_uv, uv_to_screen  # noqa: E402


def test_screen_to_uv_flips_vertical_axis():
    rect = pygame.Rect(0, 0, 100, 200)
    u, v = screen_to_uv((0, 199), rect)
    assert u == pytest.approx(0.005)
    assert v == pytest.approx(0.0025)
    u, v = screen_to_uv((99, 0), rect)
    assert u == pytest.approx(0.995)
    assert v == pytest.approx(0.9975)


def test_screen_to_uv_outside_map():
    rect = pygame.Rect(10, 10, 100, 100)
    assert screen_to_uv((5, 50), rect) is None
    assert screen_to_uv((50, 110), rect) is None


def test_uv_to_screen_round_trip_stays_in_cell():
    rect = pygame.Rect(0, 0, 640, 640)
    x, y = uv_to_screen((0.25, 0.75), rect)
    u, v = screen_to_uv((x, y), rect)
    assert u == pytest.approx(0.25, abs=1 / 640)
    assert v == pytest.approx(0.75, abs=1 / 640)


@pytest.fixture
def font():
    pygame.font.init()
    return pygame.font.Font(None, 18)


def test_panel_height_follows_row_count(font):
    from render.config import LINE_HEIGHT
    from render.primitives import draw_panel

    surface = pygame.Surface((200, 400))
    bottom = draw_panel(surface, font, "Totals", ["water=1.0", "sand=2.0"], (10, 20), 180)
    assert bottom == 20 + LINE_HEIGHT + 6 + 2 * LINE_HEIGHT + 8


def test_legend_paints_each_swatch(font):
    from render.config import LINE_HEIGHT
    from render.primitives import SWATCH_SIZE, draw_legend

    surface = pygame.Surface((200, 400))
    entries = [((255, 0, 0), "red"), ((0, 0, 255), "blue")]
    bottom = draw_legend(surface, font, entries, (10, 20), 180)

    first_row = 20 + LINE_HEIGHT + 6
    assert surface.get_at((10 + SWATCH_SIZE // 2, first_row + 3 + SWATCH_SIZE // 2))[:3] == (255, 0, 0)
    assert surface.get_at((10 + SWATCH_SIZE // 2, first_row + LINE_HEIGHT + 3 + SWATCH_SIZE // 2))[:3] == (0, 0, 255)
    assert bottom == first_row + 2 * LINE_HEIGHT + 8


def test_sidebar_draws_with_and_without_help(font, small_state):
    from pygame_runner import render_sidebar
    from simulation.params import RateConstants
    from tools import ToolController

    surface = pygame.Surface((240, 640))
    rect = pygame.Rect(0, 0, 240, 640)
    for show_help in (True, False):
        render_sidebar(surface, font, rect, small_state, ToolController(), RateConstants(),
                       3.0, False, show_help)
