# endpoints.py
from typing import Iterable, Tuple

DEFAULT_ENDPOINTS: Tuple[str, ...] = (
    "https://www.bing.com/indexnow",
    "https://api.indexnow.org/indexnow",
    "https://yandex.com/indexnow",
    "https://search.seznam.cz/indexnow",
    "https://search.naver.com/indexnow",
)

def parse_extra_endpoints(raw: str) -> Tuple[str, ...]:
    """'a, ,b' -> ('a', 'b')"""
    return tuple(s.strip() for s in (raw or "").split(",") if s.strip())

def build_endpoints(extra: str = "", defaults: Iterable[str] = DEFAULT_ENDPOINTS) -> Tuple[str, ...]:
    """
    Union of defaults and configured extras, deduplicated.
    Defaults come first, then extras in the order configured.
    """
    seen = {}
    for ep in (*defaults, *parse_extra_endpoints(extra)):
        seen.setdefault(ep, None)
    return tuple(seen)
