import pytest
import requests

import proxy_browser


class FakeResponse:
    def __init__(self, text="", status_code=200, content=None):
        self.text = text
        self.status_code = status_code
        self.content = content if content is not None else text.encode("utf-8")

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakeSession:
    """Stands in for requests.Session and records every GET."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        quest = (params or {}).get("quest")
        return self.responses.get(quest, FakeResponse("", 404))


@pytest.fixture
def fake_session(monkeypatch):
    fake = FakeSession()
    monkeypatch.setattr(proxy_browser, "session", fake)
    return fake


@pytest.fixture
def pages():
    return {
        "https://example.com": "<p>hi</p>",
        "https://a.test/": "<p>A</p>",
        "https://b.test/": "<p>B</p>",
        "https://c.test/": "<p>C</p>",
        "https://d.test/": "<p>D</p>",
    }


@pytest.fixture
def controller(pages):
    def fetcher(url):
        if url in pages:
            return pages[url]
        raise proxy_browser.NetworkError(f"cannot reach {url}")

    return proxy_browser.Controller(proxy_browser.AppState(theme=proxy_browser.ThemeMode.DARK),
                                    fetcher=fetcher)
