# alignment/image_io.py
from PIL import Image, ImageOps, UnidentifiedImageError
import io, os

from .errors import InvalidImage

def allowed(filename: str, extensions) -> bool:
    """extensions are lower-case and dot-less, as in ALLOWED_EXTENSIONS."""
    return os.path.splitext(filename.lower())[1].lstrip('.') in extensions

def load_image(path: str) -> Image.Image:
    """Open a gallery photo upright (EXIF orientation applied) in RGB."""
    try:
        img = Image.open(path)
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImage(f"cannot decode {os.path.basename(path)}: {exc}") from exc
    if img.mode != "RGB":
        img = img.convert("RGB")
    if img.width <= 0 or img.height <= 0:
        raise InvalidImage(f"empty image {os.path.basename(path)}")
    return img

def _save_params(fmt: str, quality: int):
    fmt = fmt.upper()
    params = {}
    if fmt in ("JPG", "JPEG"):
        params.update({"quality": int(quality), "subsampling": 2, "optimize": True})
        fmt = "JPEG"
    elif fmt == "WEBP":
        params.update({"quality": int(quality)})
    return fmt, params

def save_image(img: Image.Image, path: str, fmt: str = None, quality: int = 80):
    fmt, params = _save_params(fmt or os.path.splitext(path)[1][1:] or "JPEG", quality)
    if fmt == "JPEG" and img.mode != "RGB":
        img = img.convert("RGB")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    img.save(path, fmt, **params)
    return path

def to_bytes(img: Image.Image, fmt: str = "PNG", quality: int = 80) -> bytes:
    buf = io.BytesIO()
    fmt, params = _save_params(fmt, quality)
    img.save(buf, fmt, **params)
    buf.seek(0)
    return buf.read()
