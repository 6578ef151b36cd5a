import pytest
import requests

import proxy_browser
from proxy_browser import NetworkError, ValidationError, fetch, fetch_bytes

from conftest import FakeResponse


def test_fetch_sends_target_as_quest(fake_session):
    fake_session.responses["https://example.com/a b"] = FakeResponse("<p>hi</p>")

    assert fetch("https://example.com/a b") == "<p>hi</p>"

    url, params, timeout = fake_session.calls[0]
    assert url == "https://api.codetabs.com/v1/proxy"
    assert params == {"quest": "https://example.com/a b"}
    assert timeout is proxy_browser.REQUEST_TIMEOUT


def test_fetch_returns_body_untouched(fake_session):
    html = "<script>alert(1)</script><p>raw</p>"
    fake_session.responses["http://raw.test"] = FakeResponse(html)
    assert fetch("http://raw.test") == html


@pytest.mark.parametrize("url", ["example.com", "ftp://x.test", "HTTP://upper.test", ""])
def test_fetch_rejects_non_http_without_network(fake_session, url):
    with pytest.raises(ValidationError):
        fetch(url)
    assert fake_session.calls == []


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(ValidationError, proxy_browser.BrowserError)


def test_non_ok_status_is_network_error(fake_session):
    fake_session.responses["https://gone.test"] = FakeResponse("nope", 502)
    with pytest.raises(NetworkError, match="502"):
        fetch("https://gone.test")


def test_transport_failure_is_network_error(fake_session):
    fake_session.error = requests.ConnectionError("connection refused")
    with pytest.raises(NetworkError, match="connection refused") as info:
        fetch("https://down.test")
    assert isinstance(info.value.__cause__, requests.ConnectionError)


def test_fetch_does_not_retry(fake_session):
    fake_session.error = requests.Timeout("slow")
    with pytest.raises(NetworkError):
        fetch("https://slow.test")
    assert len(fake_session.calls) == 1


def test_fetch_bytes_returns_content(fake_session):
    fake_session.responses["https://img.test/a.png"] = FakeResponse(content=b"\x89PNG")
    assert fetch_bytes("https://img.test/a.png") == b"\x89PNG"


def test_explicit_session_wins(fake_session):
    from conftest import FakeSession

    other = FakeSession({"https://x.test": FakeResponse("x")})
    assert fetch("https://x.test", http=other) == "x"
    assert fake_session.calls == []
