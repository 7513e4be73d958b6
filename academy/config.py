"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse comma separated list from environment variable."""
    raw = os.environ.get(name)
    if not raw:
        return default
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'academy.db'}"
)

# Authentication
SECRET_KEY = os.environ.get(
    "SECRET_KEY",
    "CHANGE_ME_IN_PRODUCTION_USE_openssl_rand_hex_32"
)
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _parse_int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
SESSION_EXTEND_MINUTES = _parse_int_env("SESSION_EXTEND_MINUTES", 60)

# Quizzes
DEFAULT_PASSING_SCORE = _parse_int_env("DEFAULT_PASSING_SCORE", 70)

# Embeds
ALLOWED_VIDEO_DOMAINS = _parse_list_env(
    "ALLOWED_VIDEO_DOMAINS",
    (
        "youtube.com",
        "www.youtube.com",
        "youtu.be",
        "vimeo.com",
        "player.vimeo.com",
        "dailymotion.com",
        "www.dailymotion.com",
    ),
)
ALLOWED_AUDIO_DOMAINS = _parse_list_env(
    "ALLOWED_AUDIO_DOMAINS",
    (
        "soundcloud.com",
        "w.soundcloud.com",
        "open.spotify.com",
    ),
)
H5P_EMBED_PREFIX = os.environ.get("H5P_EMBED_PREFIX", "/h5p/embed/")

# Certificates
APP_BASE_URL = os.environ.get("APP_BASE_URL", "http://localhost:8000")
CERTIFICATE_FONT_DIR = Path(
    os.environ.get("CERTIFICATE_FONT_DIR", "/usr/share/fonts/truetype/dejavu")
)
CERTIFICATE_WIDTH = 1754  # A4 landscape at 150 dpi
CERTIFICATE_HEIGHT = 1240
CERTIFICATE_DPI = 150

# Client-local progress store
PROGRESS_DIR = Path(
    os.environ.get("ACADEMY_PROGRESS_DIR", Path.home() / ".academy")
)
PROGRESS_FILE_NAME = "visited_pages.json"
