"""Rate-limit keying."""

from starlette.requests import Request

from leaddesk.core.limiter import caller_key


def _request(headers: list[tuple[bytes, bytes]]) -> Request:
    return Request({"type": "http", "headers": headers, "client": ("10.0.0.7", 5000)})


def test_rate_limit_key_prefers_bearer_token() -> None:
    anonymous = caller_key(_request([]))
    first = caller_key(_request([(b"authorization", b"Bearer one")]))
    second = caller_key(_request([(b"authorization", b"Bearer two")]))

    assert anonymous == "10.0.0.7"
    assert first.startswith("token:")
    assert first != second
