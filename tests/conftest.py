"""Shared fakes for the export pipeline tests.

No real browser is launched: ``browser_session`` is replaced by a context
manager yielding a :class:`FakePage` that serves canned responses and answers
the pipeline's in-page scripts with BeautifulSoup.
"""

from __future__ import annotations

from contextlib import contextmanager
from urllib.parse import urljoin

import pytest
from bs4 import BeautifulSoup

from canvas_export.pipeline.styles import _COLLECT_STYLES_JS, _MAIN_HTML_JS


class FakeResponse:
    def __init__(self, status: int = 200, body: str = "") -> None:
        self.status = status
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self._body


class FakePage:
    """Minimal stand-in for ``playwright.sync_api.Page``.

    *site* maps URL → ``(status, body)`` or an exception instance to raise.
    """

    def __init__(self, site: dict) -> None:
        self.site = site
        self.url = "about:blank"
        self.html = ""
        self.visited: list[str] = []

    def goto(self, url: str, **kwargs) -> FakeResponse:
        self.visited.append(url)
        entry = self.site.get(url, ConnectionError(f"net::ERR_NAME_NOT_RESOLVED at {url}"))
        if isinstance(entry, Exception):
            raise entry
        status, body = entry
        self.url = url
        self.html = body
        return FakeResponse(status, body)

    def set_content(self, html: str) -> None:
        self.html = html

    def set_default_navigation_timeout(self, timeout: float) -> None:
        pass

    def evaluate(self, script: str):
        soup = BeautifulSoup(self.html, "html.parser")
        if script == _COLLECT_STYLES_JS:
            return {
                "inlineStyles": [tag.decode_contents() for tag in soup.find_all("style")],
                "stylesheetUrls": [
                    urljoin(self.url, link["href"])
                    for link in soup.select('link[rel="stylesheet"]')
                    if link.get("href")
                ],
            }
        if script == _MAIN_HTML_JS:
            main = soup.find("main")
            if main is not None:
                return str(main)
            return soup.body.decode_contents() if soup.body else ""
        raise AssertionError(f"unexpected script: {script!r}")


@pytest.fixture
def fake_browser(monkeypatch):
    """Patch every ``browser_session`` user; return a dict to fill with the site.

    ``state["pages"]`` records each page handed out, one per session.
    """
    state: dict = {"site": {}, "pages": [], "closed": 0}

    @contextmanager
    def _session(config=None):
        page = FakePage(state["site"])
        state["pages"].append(page)
        try:
            yield page
        finally:
            state["closed"] += 1

    for target in (
        "canvas_export.pipeline.runner.browser_session",
        "canvas_export.pipeline.extractor.browser_session",
        "cli.main.browser_session",
    ):
        monkeypatch.setattr(target, _session)
    return state
