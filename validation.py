# validation.py
import json
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from schemas import SubmissionPayload

MAX_URLS = 10000  # IndexNow per-request limit

_url_adapter = TypeAdapter(AnyUrl)

class PayloadValidationError(Exception):
    def __init__(self, error: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(error)
        self.error = error
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.error}
        if self.detail is not None:
            out["detail"] = self.detail
        return out

class UrlPartition(NamedTuple):
    kept: List[str]        # normalized, same host, at most MAX_URLS
    rejected: List[Any]    # unparseable or wrong host, as given
    truncated: int         # valid entries past MAX_URLS

def _parse_url(candidate: Any) -> Optional[AnyUrl]:
    if isinstance(candidate, str):
        candidate = candidate.strip()
    try:
        return _url_adapter.validate_python(candidate)
    except ValidationError:
        return None

def partition_urls(entries: Any, host: str) -> UrlPartition:
    if not isinstance(entries, list):
        return UrlPartition([], [], 0)
    host = host.lower()
    kept: List[str] = []
    rejected: List[Any] = []
    truncated = 0
    for entry in entries:
        url = _parse_url(entry)
        if url is None or url.host != host:
            rejected.append(entry)
        elif len(kept) < MAX_URLS:
            kept.append(str(url))
        else:
            truncated += 1
    return UrlPartition(kept, rejected, truncated)

def filter_urls(entries: Any, host: str) -> List[str]:
    """
    Keep absolute URLs whose host is `host`, normalized, in order,
    capped at MAX_URLS. Anything else is dropped without complaint.
    """
    return partition_urls(entries, host).kept

def validate_submission(raw: bytes, host: str, key: str, key_location: str) -> SubmissionPayload:
    try:
        body = json.loads(raw)
    except (ValueError, RecursionError):
        raise PayloadValidationError("invalid json")

    entries = body.get("urlList") if isinstance(body, dict) else None
    url_list = filter_urls(entries, host)

    if not key or not key_location or not url_list:
        raise PayloadValidationError(
            "INDEXNOW_KEY or urlList missing",
            detail={
                "hasKey": bool(key),
                "urlCount": len(url_list),
                "hostExpected": host,
            },
        )

    return SubmissionPayload(host=host, key=key, keyLocation=key_location, urlList=url_list)
