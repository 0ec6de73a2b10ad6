import re
from urllib.parse import parse_qs, urlparse

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
SLUG_MAX_LENGTH = 50
RESERVED_SLUGS = frozenset({"companies", "jobs", "job-board", "me", "healthz", "slug-suggestion"})

_SCHEME_PREFIX_RE = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)
_DOMAIN_SUFFIX_RE = re.compile(r"\.(com|net|org|io|co|dev|app|tech|ai|in)\b.*$", re.IGNORECASE)
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"
VIMEO_EMBED_BASE = "https://player.vimeo.com/video/"


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_RE.match(slug)) and len(slug) <= SLUG_MAX_LENGTH


def suggest_slug(name: str) -> str:
    """Derive a URL slug from a company name, tolerating pasted website addresses."""
    cleaned = _SCHEME_PREFIX_RE.sub("", name.strip())
    cleaned = _DOMAIN_SUFFIX_RE.sub("", cleaned)
    slug = _NON_SLUG_RE.sub("-", cleaned.lower().strip()).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def careers_path(slug: str) -> str:
    return f"/{slug}/careers"


def embed_video_url(raw_url: str | None) -> str | None:
    """Map YouTube and Vimeo share links to their iframe embed URLs."""
    if not raw_url or not raw_url.strip():
        return None

    url = raw_url.strip()
    parsed = urlparse(url)
    host = parsed.netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    if host.startswith("m."):
        host = host[2:]

    if host == "youtube.com" and parsed.path == "/watch":
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if video_id:
            return f"{YOUTUBE_EMBED_BASE}{video_id}"
    if host == "youtu.be":
        video_id = parsed.path.strip("/").split("/")[0]
        if video_id:
            return f"{YOUTUBE_EMBED_BASE}{video_id}"
    if host == "vimeo.com":
        video_id = parsed.path.strip("/").split("/")[0]
        if video_id:
            return f"{VIMEO_EMBED_BASE}{video_id}"

    return url
