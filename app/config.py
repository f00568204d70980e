import os

def _color(value: str):
    return tuple(int(c) for c in value.split(","))

class AppConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    OUTPUT_FOLDER = os.getenv("OUTPUT_FOLDER", "static/output")
    ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "webp"}
    VIEWPORT_SIDE = int(os.getenv("VIEWPORT_SIDE", "1080"))  # preview square, client layout constant
    TARGET_SQUARE_SIDE = int(os.getenv("TARGET_SQUARE_SIDE", "1080"))  # saved photo
    PREVIEW_SIDE = int(os.getenv("PREVIEW_SIDE", "360"))
    JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "80"))
    FILL_COLOR = _color(os.getenv("FILL_COLOR", "255,255,255"))  # behind rotated corners
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
