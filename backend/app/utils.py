"""
Utility functions
"""

import hashlib
import hmac
import logging
import threading
import time
import urllib.parse
from typing import Mapping, Tuple

from pydantic import ValidationError

from .config import DEFAULT_CACHE_TTL, EXAMPLE_CACHE_KEY, EXAMPLE_CACHE_TTL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_cache_key_lock = threading.Lock()
_last_cache_key = 0


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API process"""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def is_valid_website(url: str) -> bool:
    """Check that url is an absolute http(s) URL with a host"""
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.hostname)


def unique_cache_key() -> str:
    """Millisecond timestamp, strictly increasing within this process"""
    global _last_cache_key

    with _cache_key_lock:
        stamp = int(time.time() * 1000)
        if stamp <= _last_cache_key:
            stamp = _last_cache_key + 1
        _last_cache_key = stamp
    return str(stamp)


def cache_policy(url: str, example_url: str) -> Tuple[str, int]:
    """Pick the (cache_key, cache_ttl) pair for a render request.

    The demo website is rendered once and served from the provider cache for
    a month. Any other website gets a fresh key so every request re-renders.
    """
    if url == example_url:
        return EXAMPLE_CACHE_KEY, EXAMPLE_CACHE_TTL
    return unique_cache_key(), DEFAULT_CACHE_TTL


def sign_query(query: Mapping, secret_key: str) -> str:
    """Encode query and append its HMAC-SHA256 signature"""
    query_string = urllib.parse.urlencode(query, doseq=True)
    signature = hmac.new(
        secret_key.encode("utf-8"),
        msg=query_string.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()
    return f"{query_string}&signature={signature}"


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into a single line message"""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(messages)
