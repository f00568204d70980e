import logging

import numpy as np
from PIL import Image

from alignment import ViewTransform, ViewportSpec, commit_photo, default_transform, SourceImage


def _diff(a, b):
    return float(np.abs(np.asarray(a, dtype=np.float32) - np.asarray(b, dtype=np.float32)).mean())


def test_unmodified_view_is_reproduced(gradient):
    img = gradient(300, 400)
    viewport = ViewportSpec(108)
    t = default_transform(SourceImage(300, 400), viewport)

    result = commit_photo(img, t, viewport, target_side=108)

    # what the viewport showed: fit to width, middle square, mirrored like the camera
    shown = img.resize((108, 144), Image.LANCZOS).crop((0, 18, 108, 126))
    expected = shown.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    assert result.image.size == (108, 108)
    assert result.crop.to_dict() == {"x": 0, "y": 27, "side": 162}
    assert _diff(result.image, expected) < 2.0


def test_output_is_always_the_target_square(gradient):
    img = gradient(640, 480)
    viewport = ViewportSpec(120)
    t = ViewTransform(pan_x=25, pan_y=-10).with_zoom(1.45).with_rotation(-12.3)

    result = commit_photo(img, t, viewport, target_side=96)

    assert result.image.size == (96, 96)
    assert result.plan.ops == ["resize", "rotate", "zoom", "crop", "resize_to", "flip"]
    assert result.crop.fits_in(result.scales.processed)


def test_near_zero_rotation_matches_no_rotation(gradient):
    img = gradient(200, 260)
    viewport = ViewportSpec(100)
    base = default_transform(SourceImage(200, 260), viewport)
    tilted = ViewTransform(base.pan_x, base.pan_y, 1.0, 0.05)

    a = commit_photo(img, base, viewport, target_side=64)
    b = commit_photo(img, tilted, viewport, target_side=64)
    assert np.array_equal(np.asarray(a.image), np.asarray(b.image))


def test_panning_moves_the_content(gradient):
    img = gradient(300, 400)
    viewport = ViewportSpec(108)
    base = default_transform(SourceImage(300, 400), viewport)

    centered = commit_photo(img, base, viewport, target_side=64)
    lower = commit_photo(img, base.dragged(0, -30), viewport, target_side=64)

    assert lower.crop.y > centered.crop.y
    # the green channel grows downwards in the gradient
    assert np.asarray(lower.image)[..., 1].mean() > np.asarray(centered.image)[..., 1].mean()


def test_summary_is_json_ready(gradient):
    result = commit_photo(gradient(300, 400), ViewTransform(0, 18), ViewportSpec(108), target_side=64)
    summary = result.summary()
    assert summary["crop"]["side"] == result.crop.side
    assert summary["plan"][0]["op"] == "resize"
    assert summary["display"] == {"w": 108, "h": 144}


def test_commit_logs_the_solved_geometry(gradient, caplog):
    with caplog.at_level(logging.DEBUG, logger="alignment.commit"):
        commit_photo(gradient(300, 400), ViewTransform(0, 18), ViewportSpec(108), target_side=64)
    assert any("crop=" in r.getMessage() for r in caplog.records)
