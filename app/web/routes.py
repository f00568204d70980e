# app/web/routes.py
from flask import Blueprint, request, current_app, jsonify, make_response, send_from_directory
from werkzeug.utils import secure_filename
from alignment import (
    InvalidImage, AlignmentError, SourceImage, ViewportSpec, ViewTransform,
    commit_photo, default_transform, fit_display,
)
from alignment.image_io import load_image, save_image, allowed, to_bytes
from alignment.manipulator import PillowManipulator
import os, time

bp = Blueprint("web", __name__)
CACHE = {"src_path": None, "orig_w": None, "orig_h": None}


def _source():
    return SourceImage(CACHE["orig_w"], CACHE["orig_h"], CACHE["src_path"])

def _viewport(params):
    side = int(params.get("viewport") or current_app.config["VIEWPORT_SIDE"])
    if side <= 0:
        raise ValueError(f"viewport must be positive, got {side}")
    return ViewportSpec(side)

def _transform(params, source, viewport) -> ViewTransform:
    """
    Read {"crop": {x, y, zoom, rot}}; zoom and rotation are clamped like the sliders do.

    A client that tracks the on-screen translation of the image may send
    {"tx", "ty"} instead of the pan {"x", "y"}.
    """
    base = default_transform(source, viewport)
    crop = params.get("crop", {}) or {}
    zoom = float(crop.get("zoom", 1.0))
    rot = float(crop.get("rot", 0.0))
    if "tx" in crop or "ty" in crop:
        return ViewTransform.from_translation(float(crop.get("tx", -base.pan_x)),
                                              float(crop.get("ty", -base.pan_y)), zoom, rot)
    t = ViewTransform(pan_x=float(crop.get("x", base.pan_x)),
                      pan_y=float(crop.get("y", base.pan_y)))
    return t.with_zoom(zoom).with_rotation(rot)

def _manipulator():
    return PillowManipulator(fill_color=current_app.config["FILL_COLOR"])

def _no_image():
    return jsonify({"error": "No image uploaded"}), 400


@bp.errorhandler(InvalidImage)
def handle_invalid_image(exc):
    current_app.logger.warning("invalid image: %s", exc)
    return jsonify({"error": InvalidImage.user_message}), 422

@bp.errorhandler(AlignmentError)
def handle_alignment_error(exc):
    # contract violation between layers, nothing was written
    current_app.logger.exception("alignment failed: %s", exc)
    return jsonify({"error": "Internal alignment error"}), 500


@bp.post("/api/upload")
def api_upload():
    f = request.files.get("image")
    if not f or not allowed(f.filename, current_app.config["ALLOWED_EXTENSIONS"]):
        return jsonify({"error": "Invalid or missing image"}), 400
    fn = f"{int(time.time())}_{secure_filename(f.filename)}"
    dst = os.path.join(current_app.config["UPLOAD_FOLDER"], fn)
    f.save(dst)
    img = load_image(dst)
    CACHE.update({"src_path": dst, "orig_w": img.width, "orig_h": img.height})

    viewport = ViewportSpec(current_app.config["VIEWPORT_SIDE"])
    fit = fit_display(_source(), viewport)
    return jsonify({
        "ok": True, "path": fn, "w": img.width, "h": img.height,
        "display": {"w": fit.display.width, "h": fit.display.height},
        "crop": default_transform(_source(), viewport).to_dict(),
    })

@bp.post("/api/reset")
def api_reset():
    """Zoom 1, no rotation, image recentered."""
    if not CACHE.get("src_path"):
        return _no_image()
    params = request.get_json(silent=True) or {}
    try:
        viewport = _viewport(params)
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid crop parameters"}), 400
    return jsonify({"crop": default_transform(_source(), viewport).to_dict()})

@bp.post("/api/preview")
def api_preview():
    """Small square of exactly what the viewport shows."""
    if not CACHE.get("src_path"):
        return _no_image()

    params = request.get_json(force=True) or {}
    try:
        viewport = _viewport(params)
        transform = _transform(params, _source(), viewport)
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid crop parameters"}), 400

    img = load_image(CACHE["src_path"])
    result = commit_photo(img, transform, viewport,
                          target_side=current_app.config["PREVIEW_SIDE"],
                          manipulator=_manipulator())
    data = to_bytes(result.image, "PNG")
    return make_response(data, 200, {"Content-Type": "image/png"})

@bp.post("/api/commit")
def api_commit():
    """Full-quality square photo, saved as JPEG."""
    if not CACHE.get("src_path"):
        return _no_image()

    params = request.get_json(force=True) or {}
    try:
        viewport = _viewport(params)
        transform = _transform(params, _source(), viewport)
        week = params.get("week")
        prefix = f"week{int(week)}" if week is not None else "progress"
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid crop parameters"}), 400

    img = load_image(CACHE["src_path"])
    result = commit_photo(img, transform, viewport,
                          target_side=current_app.config["TARGET_SQUARE_SIDE"],
                          manipulator=_manipulator())

    fn = f"{prefix}_{int(time.time() * 1000)}.jpg"
    save_image(result.image, os.path.join(current_app.config["OUTPUT_FOLDER"], fn),
               "JPEG", quality=current_app.config["JPEG_QUALITY"])
    current_app.logger.info("saved %s (crop %s)", fn, result.crop.to_dict())

    payload = {"ok": True, "path": fn, "transform": transform.to_dict()}
    payload.update(result.summary())
    return jsonify(payload)

@bp.get("/api/photos/<path:name>")
def api_photo(name):
    return send_from_directory(current_app.config["OUTPUT_FOLDER"], secure_filename(name))
