"""
Shared fixtures for the alignment tests.

Provides the reference portrait scenario, synthetic photos and a Flask client.
"""
import io

import numpy as np
import pytest
from PIL import Image

from alignment import SourceImage, ViewportSpec, compose_scales, fit_display, plan_preprocess, quality_resize_size
from alignment.manipulator import PillowManipulator
from alignment.planner import Resize


def gradient_image(width, height):
    """Smooth RGB gradient, resampling it twice stays close to itself."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    r = np.tile(xs, (height, 1))
    g = np.tile(ys[:, None], (1, width))
    b = np.full((height, width), 128, dtype=np.float32)
    arr = np.stack([r, g, b], axis=-1).astype(np.uint8)
    return Image.fromarray(arr, "RGB")


def measured(source, viewport, rotation=0.0, zoom=1.0, target=1080):
    """Run resize/rotate/zoom on a blank canvas the way a commit does.

    Returns (fit, scales, resize_scale).
    """
    manipulator = PillowManipulator()
    fit = fit_display(source, viewport)
    resize_scale = quality_resize_size(source, target).width / source.width
    handle = resized = None
    for step in plan_preprocess(source, resize_scale, rotation, zoom):
        if isinstance(step, Resize):
            handle = manipulator.load(Image.new("RGB", (step.width, step.height)))
            resized = handle.size
        else:
            handle = manipulator.apply(handle, step)
    return fit, compose_scales(source, fit.display, resized, handle.size), resize_scale


@pytest.fixture
def portrait():
    return SourceImage(3000, 4000)


@pytest.fixture
def landscape():
    return SourceImage(4000, 3000)


@pytest.fixture
def viewport():
    return ViewportSpec(1080)


@pytest.fixture
def png_bytes():
    def _make(width=300, height=400):
        buf = io.BytesIO()
        gradient_image(width, height).save(buf, "PNG")
        buf.seek(0)
        return buf
    return _make


@pytest.fixture
def app(tmp_path):
    from app import create_app
    from app.web import routes

    routes.CACHE.update({"src_path": None, "orig_w": None, "orig_h": None})
    app = create_app({
        "TESTING": True,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "OUTPUT_FOLDER": str(tmp_path / "output"),
        "VIEWPORT_SIDE": 108,
        "TARGET_SQUARE_SIDE": 216,
        "PREVIEW_SIDE": 64,
    })
    yield app
    routes.CACHE.update({"src_path": None, "orig_w": None, "orig_h": None})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def measure():
    return measured


@pytest.fixture
def gradient():
    return gradient_image
