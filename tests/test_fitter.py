import pytest

from alignment import InvalidImage, InvalidInput, SourceImage, ViewportSpec
from alignment.fitter import default_pan, default_transform, fit_display


def test_portrait_fit_matches_reference_scenario(portrait, viewport):
    fit = fit_display(portrait, viewport)
    assert (fit.display.width, fit.display.height) == (1080, 1440)
    assert (fit.default_pan.x, fit.default_pan.y) == (0, 180)


def test_landscape_and_square_start_without_pan(landscape, viewport):
    fit = fit_display(landscape, viewport)
    assert (fit.display.width, fit.display.height) == (1080, 810)
    assert (fit.default_pan.x, fit.default_pan.y) == (0, 0)

    square = fit_display(SourceImage(2000, 2000), viewport)
    assert (square.display.width, square.display.height) == (1080, 1080)
    assert (square.default_pan.x, square.default_pan.y) == (0, 0)


@pytest.mark.parametrize("w, h", [(1, 3), (9, 16), (2448, 3264), (999, 1001)])
def test_portrait_pan_is_vertical_and_positive(w, h, viewport):
    pan = default_pan(SourceImage(w, h), viewport)
    assert pan.x == 0
    assert pan.y > 0


def test_width_is_always_the_viewport_side():
    for w, h in [(640, 480), (480, 640), (12000, 100), (100, 12000)]:
        fit = fit_display(SourceImage(w, h), ViewportSpec(375))
        assert fit.display.width == 375
        assert fit.display.height >= 1


def test_height_rounds_half_up():
    # 100 / (4 / 3) = 75 exactly, 100 / (8 / 3) = 37.5 -> 38
    assert fit_display(SourceImage(4, 3), ViewportSpec(100)).display.height == 75
    assert fit_display(SourceImage(8, 3), ViewportSpec(100)).display.height == 38


def test_very_wide_image_keeps_a_positive_height():
    fit = fit_display(SourceImage(100000, 1), ViewportSpec(100))
    assert fit.display.height == 1


@pytest.mark.parametrize("w, h", [(0, 100), (100, 0), (-5, 10), (10, -5)])
def test_non_positive_dimensions_are_invalid(w, h, viewport):
    with pytest.raises(InvalidImage):
        fit_display(SourceImage(w, h), viewport)


def test_zero_viewport_is_invalid(portrait):
    with pytest.raises(InvalidInput):
        fit_display(portrait, ViewportSpec(0))


def test_default_transform_is_the_reset_state(portrait, viewport):
    t = default_transform(portrait, viewport)
    assert (t.pan_x, t.pan_y, t.zoom, t.rotation_deg) == (0, 180, 1.0, 0.0)
