import json

import pytest

from validation import MAX_URLS, PayloadValidationError, filter_urls, partition_urls, validate_submission

HOST = "example.com"
KEY = "abc123"
KEY_LOCATION = "https://example.com/abc123.txt"


def _body(obj) -> bytes:
    return json.dumps(obj).encode("utf-8")


def test_keeps_same_host_urls_in_order():
    entries = [
        "https://example.com/a",
        "https://other-host/x",
        "not a url",
        42,
        "/relative/path",
        "https://EXAMPLE.com:8443/b",
        "https://sub.example.com/c",
        "https://example.com/c",
    ]
    assert filter_urls(entries, HOST) == [
        "https://example.com/a",
        "https://example.com:8443/b",
        "https://example.com/c",
    ]


def test_non_list_is_empty():
    assert filter_urls("https://example.com/a", HOST) == []
    assert filter_urls(None, HOST) == []


def test_malformed_url_dropped():
    assert filter_urls(["http://[::1", "https://example.com/ok"], HOST) == ["https://example.com/ok"]


def test_truncated_at_limit():
    entries = [f"https://example.com/{i}" for i in range(MAX_URLS + 5)]
    kept = filter_urls(entries, HOST)
    assert len(kept) == MAX_URLS
    assert kept[-1] == f"https://example.com/{MAX_URLS - 1}"


def test_invalid_port_dropped():
    assert filter_urls(["https://example.com:abc/x", "https://example.com:99999/y"], HOST) == []


def test_kept_urls_are_normalized():
    assert filter_urls(["https://example.com/a b", "  https://Example.com  "], HOST) == [
        "https://example.com/a%20b",
        "https://example.com/",
    ]


def test_partition_separates_rejected_from_truncated():
    entries = ["https://other-host/x"] + [f"https://example.com/{i}" for i in range(MAX_URLS + 2)]
    part = partition_urls(entries, HOST)
    assert len(part.kept) == MAX_URLS
    assert part.rejected == ["https://other-host/x"]
    assert part.truncated == 2


def test_valid_submission():
    payload = validate_submission(_body({"urlList": ["https://example.com/a"]}), HOST, KEY, KEY_LOCATION)
    assert payload.host == HOST
    assert payload.key == KEY
    assert payload.keyLocation == KEY_LOCATION
    assert payload.urlList == ["https://example.com/a"]


@pytest.mark.parametrize(
    "raw",
    [b"", b"{not json", b"\xff\xfe", b"[" * 200000],
    ids=["empty", "garbage", "bom-only", "deeply-nested"],
)
def test_invalid_json(raw):
    with pytest.raises(PayloadValidationError) as exc:
        validate_submission(raw, HOST, KEY, KEY_LOCATION)
    assert exc.value.to_dict() == {"error": "invalid json"}


def test_other_host_only_reports_zero_count():
    with pytest.raises(PayloadValidationError) as exc:
        validate_submission(_body({"urlList": ["https://other-host/x"]}), HOST, KEY, KEY_LOCATION)
    assert exc.value.detail == {"hasKey": True, "urlCount": 0, "hostExpected": HOST}


def test_missing_key_fails_without_leaking():
    with pytest.raises(PayloadValidationError) as exc:
        validate_submission(_body({"urlList": ["https://example.com/a"]}), HOST, "", "")
    out = exc.value.to_dict()
    assert out["detail"] == {"hasKey": False, "urlCount": 1, "hostExpected": HOST}


def test_missing_key_location_fails():
    with pytest.raises(PayloadValidationError):
        validate_submission(_body({"urlList": ["https://example.com/a"]}), HOST, KEY, "")


@pytest.mark.parametrize("obj", [{}, {"urlList": "https://example.com/a"}, ["https://example.com/a"]])
def test_missing_or_wrong_shape_list_is_empty(obj):
    with pytest.raises(PayloadValidationError) as exc:
        validate_submission(_body(obj), HOST, KEY, KEY_LOCATION)
    assert exc.value.detail["urlCount"] == 0
