import re
import threading
import time
from typing import Optional

NON_SAFE = re.compile(r"[^a-zA-Z0-9\s]+")
WHITESPACE = re.compile(r"\s+")

DEFAULT_STEM = "article"
EXTENSION = ".html"

_lock = threading.Lock()
_last_stamp = 0


def unique_timestamp() -> int:
    """Nanosecond wall-clock timestamp, strictly increasing within the process."""
    global _last_stamp
    with _lock:
        stamp = time.time_ns()
        if stamp <= _last_stamp:
            stamp = _last_stamp + 1
        _last_stamp = stamp
        return stamp


def slugify_name(name: Optional[str]) -> str:
    """Reduce a display name to a lowercase stem of letters, digits and hyphens.

    Returns an empty string when nothing usable is left.
    """
    if not name:
        return ""
    slug = NON_SAFE.sub("-", name)
    slug = WHITESPACE.sub("-", slug)
    return slug.strip("-").lower()


def derive_base_name(name: Optional[str] = None, stamp: Optional[int] = None) -> str:
    stem = slugify_name(name) or DEFAULT_STEM
    if stamp is None:
        stamp = unique_timestamp()
    return f"{stem}-{stamp}"


def derive_filename(name: Optional[str] = None, stamp: Optional[int] = None) -> str:
    """
    "My First Post" -> "my-first-post-<ns>.html"; no name -> "article-<ns>.html"
    """
    return derive_base_name(name, stamp) + EXTENSION
