"""Embed URL validation for video, audio and H5P content.

Only hosts on the configured allow-lists (or site-relative paths) are ever
turned into an embed source. Anything else is rejected with ``None``.
Accepted absolute URLs are rebuilt from their parsed parts, the raw input
string is never emitted.
"""
import logging
import re
from urllib.parse import SplitResult, parse_qs, urlsplit, urlunsplit

from academy.config import ALLOWED_AUDIO_DOMAINS, ALLOWED_VIDEO_DOMAINS, H5P_EMBED_PREFIX

logger = logging.getLogger(__name__)

_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{6,64}$")
_H5P_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
# Browsers read "\" as "/" and drop control characters, so the host they
# load can differ from the one urlsplit reports
_UNSAFE_CHARS = re.compile(r"[\\\s\x00-\x1f\x7f]")


def is_relative_path(url: str) -> bool:
    """Site-relative path such as ``/uploads/a.mp3``, not ``//host/...``."""
    return url.startswith("/") and not url.startswith(("//", "/\\"))


def is_allowed_host(hostname: str | None, domains: tuple[str, ...]) -> bool:
    """Check hostname against an allow-list, subdomains included."""
    if not hostname:
        return False
    hostname = hostname.lower().rstrip(".")
    return any(hostname == domain or hostname.endswith("." + domain) for domain in domains)


def _checked_parts(url: str, domains: tuple[str, ...]) -> SplitResult | None:
    """Parts of an absolute allow-listed URL, or ``None``."""
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https"):
        return None
    if parts.username is not None or parts.password is not None:
        return None
    if not is_allowed_host(parts.hostname, domains):
        return None
    return parts


def _rebuild(parts: SplitResult) -> str:
    netloc = parts.hostname.lower()
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme.lower(), netloc, parts.path, parts.query, parts.fragment))


def safe_source_url(url: str | None, domains: tuple[str, ...]) -> str | None:
    """Return the URL to emit as a source, or ``None`` if it is not allowed."""
    url = (url or "").strip()
    if not url or _UNSAFE_CHARS.search(url):
        return None
    if is_relative_path(url):
        return url
    parts = _checked_parts(url, domains)
    return _rebuild(parts) if parts is not None else None


def is_allowed_video_url(url: str) -> bool:
    return safe_source_url(url, ALLOWED_VIDEO_DOMAINS) is not None


def is_allowed_audio_url(url: str) -> bool:
    return safe_source_url(url, ALLOWED_AUDIO_DOMAINS) is not None


def _youtube_embed(parts) -> str | None:
    host = (parts.hostname or "").lower()
    path_segments = [segment for segment in parts.path.split("/") if segment]
    video_id = None
    if host == "youtu.be" and path_segments:
        video_id = path_segments[0]
    elif path_segments[:1] == ["watch"]:
        video_id = (parse_qs(parts.query).get("v") or [None])[0]
    elif len(path_segments) >= 2 and path_segments[0] in ("embed", "shorts", "live"):
        video_id = path_segments[1]
    if video_id and _VIDEO_ID.match(video_id):
        return f"https://www.youtube.com/embed/{video_id}"
    return None


def _vimeo_embed(parts) -> str | None:
    path_segments = [segment for segment in parts.path.split("/") if segment]
    if path_segments[:1] == ["video"] and len(path_segments) >= 2:
        path_segments = path_segments[1:]
    if path_segments and path_segments[0].isdigit():
        return f"https://player.vimeo.com/video/{path_segments[0]}"
    return None


def _dailymotion_embed(parts) -> str | None:
    path_segments = [segment for segment in parts.path.split("/") if segment]
    if path_segments[:1] == ["embed"]:
        path_segments = path_segments[1:]
    if len(path_segments) >= 2 and path_segments[0] == "video":
        video_id = path_segments[1].split("_")[0]
        if _VIDEO_ID.match(video_id):
            return f"https://www.dailymotion.com/embed/video/{video_id}"
    return None


def video_embed_url(url: str) -> str | None:
    """Return an embeddable player URL for an allow-listed video link.

    Known platforms are normalized to their embed form. Other allow-listed
    URLs are returned rebuilt from their parsed parts.
    """
    source = safe_source_url(url, ALLOWED_VIDEO_DOMAINS)
    if source is None:
        logger.warning("Blocked unsafe video URL: %r", url)
        return None
    if is_relative_path(source):
        return source

    parts = urlsplit(source)
    host = parts.hostname or ""
    if is_allowed_host(host, ("youtube.com", "youtu.be")):
        embed = _youtube_embed(parts)
    elif is_allowed_host(host, ("vimeo.com",)):
        embed = _vimeo_embed(parts)
    elif is_allowed_host(host, ("dailymotion.com",)):
        embed = _dailymotion_embed(parts)
    else:
        embed = None
    return embed or source


def audio_source_url(url: str) -> str | None:
    """Return the audio source if it is allow-listed, else ``None``."""
    source = safe_source_url(url, ALLOWED_AUDIO_DOMAINS)
    if source is None:
        logger.warning("Blocked unsafe audio URL: %r", url)
    return source


def h5p_embed_url(content_id: str) -> str | None:
    """Map an H5P content id to the local embed endpoint."""
    content_id = (content_id or "").strip()
    if not _H5P_ID.match(content_id):
        logger.warning("Blocked invalid H5P content id: %r", content_id)
        return None
    return f"{H5P_EMBED_PREFIX}{content_id}"
