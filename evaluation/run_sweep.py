#!/usr/bin/env python3
"""
Sweep the crop solver over pan/zoom/rotation grids and check its invariants.

For every image (or synthetic WxH size) the pre-crop pipeline is run once per
(rotation, zoom) pair on a blank canvas to measure the processed size, then
every pan offset of the grid is solved. One CSV row per image.
"""
import argparse, csv, os, sys, time
from datetime import datetime, timezone

import numpy as np
from PIL import Image, ImageOps

from alignment import (
    SourceImage, ViewportSpec, ViewTransform,
    compose_scales, default_transform, fit_display, plan_preprocess, quality_resize_size, solve_crop,
)
from alignment.geometry import MAX_ROTATION, MAX_ZOOM, MIN_ZOOM
from alignment.manipulator import PillowManipulator
from alignment.planner import Resize

def list_images(folder, exts=(".png",".jpg",".jpeg",".webp")):
    return [os.path.join(folder, f) for f in sorted(os.listdir(folder))
            if f.lower().endswith(exts)]

def image_source(path):
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        return SourceImage(img.width, img.height, path)

def parse_size(text):
    w, h = text.lower().split("x")
    return SourceImage(int(w), int(h), text)

def measure(manipulator, source, target_side, rotation, zoom):
    """Run resize/rotate/zoom on a blank canvas; return (resize_scale, resized, processed)."""
    resized_size = quality_resize_size(source, target_side)
    resize_scale = resized_size.width / source.width
    handle, resized = None, None
    for step in plan_preprocess(source, resize_scale, rotation, zoom):
        if isinstance(step, Resize):
            # skip decoding, only the size of the resize matters
            handle = manipulator.load(Image.new("RGB", (step.width, step.height)))
            resized = handle.size
        else:
            handle = manipulator.apply(handle, step)
    return resize_scale, resized, handle.size

def sweep(source, args, manipulator):
    viewport = ViewportSpec(args.viewport)
    fit = fit_display(source, viewport)
    base = default_transform(source, viewport)
    zooms = np.linspace(MIN_ZOOM, MAX_ZOOM, args.zoom_steps)
    rotations = np.linspace(-MAX_ROTATION, MAX_ROTATION, args.rot_steps)
    pans = np.linspace(-args.pan_range, args.pan_range, args.pan_steps)

    timings, bounds_violations, monotonic_violations = [], 0, 0
    for rot in rotations:
        sides = []
        for zoom in zooms:
            resize_scale, resized, processed = measure(manipulator, source, args.target, float(rot), float(zoom))
            scales = compose_scales(source, fit.display, resized, processed)
            side_at_zoom = None
            for px in pans:
                for py in pans:
                    t = ViewTransform(base.pan_x + px, base.pan_y + py, float(zoom), float(rot))
                    t0 = time.perf_counter()
                    crop = solve_crop(fit.display, viewport, t, scales, resize_scale)
                    timings.append((time.perf_counter() - t0) * 1e6)
                    if not crop.fits_in(processed):
                        bounds_violations += 1
                    if side_at_zoom is None:
                        side_at_zoom = crop.side
            sides.append(side_at_zoom)
        monotonic_violations += int(np.sum(np.diff(sides) >= 0))

    us = np.asarray(timings)
    return {
        "solves": len(us),
        "mean_us": f"{us.mean():.2f}",
        "p95_us": f"{np.percentile(us, 95):.2f}",
        "max_us": f"{us.max():.2f}",
        "bounds_violations": bounds_violations,
        "monotonic_violations": monotonic_violations,
    }

def main(argv=None):
    ap = argparse.ArgumentParser("Sweep the progress-photo crop solver")
    ap.add_argument("--images", default=None, help="folder of photos to take sizes from")
    ap.add_argument("--sizes", default="3000x4000,4000x3000,2000x2000",
                    help="comma separated WxH sizes, used when --images is not given")
    ap.add_argument("--out", default="results/logs/sweep.csv")
    ap.add_argument("--viewport", type=int, default=1080)
    ap.add_argument("--target", type=int, default=1080)
    ap.add_argument("--zoom-steps", type=int, default=8)
    ap.add_argument("--rot-steps", type=int, default=5)
    ap.add_argument("--pan-range", type=float, default=5000.0)
    ap.add_argument("--pan-steps", type=int, default=7)
    args = ap.parse_args(argv)

    if args.zoom_steps < 2:
        ap.error("--zoom-steps must be at least 2")

    if args.images:
        sources = [image_source(p) for p in list_images(args.images)]
    else:
        sources = [parse_size(s) for s in args.sizes.split(",") if s.strip()]
    if not sources:
        print("No images found.")
        return 1

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    manipulator = PillowManipulator(fill_color=(0, 0, 0))

    fieldnames = ["timestamp", "source", "width", "height", "viewport", "target", "solves",
                  "mean_us", "p95_us", "max_us", "bounds_violations", "monotonic_violations"]
    failed = False
    with open(args.out, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for i, source in enumerate(sources, 1):
            print(f"[{i}/{len(sources)}] {source.uri} ({source.width}x{source.height})")
            row = sweep(source, args, manipulator)
            failed = failed or row["bounds_violations"] > 0 or row["monotonic_violations"] > 0
            row.update({
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "source": source.uri,
                "width": source.width,
                "height": source.height,
                "viewport": args.viewport,
                "target": args.target,
            })
            writer.writerow(row); f.flush()

    print("\nDone. CSV:", args.out)
    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main())
