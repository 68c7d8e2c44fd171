"""Headless browser sessions and initial page navigation.

Playwright is imported lazily so the rest of the pipeline (and the test
suite) can be imported without a browser installed.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Optional

from canvas_export.config import Settings, settings
from canvas_export.errors import PageLoadError

if TYPE_CHECKING:
    from playwright.sync_api import Page


@contextmanager
def browser_session(config: Optional[Settings] = None) -> Iterator["Page"]:
    """Launch Chromium, yield a fresh page and close the browser on exit.

    The browser is closed whether the body returns normally or raises.
    """
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    cfg = config or settings
    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=cfg.headless)
        try:
            page = browser.new_page()
            if cfg.navigation_timeout_ms is not None:
                page.set_default_navigation_timeout(cfg.navigation_timeout_ms)
            yield page
        finally:
            browser.close()


def fetch_page(page: Any, url: str, config: Optional[Settings] = None) -> None:
    """Navigate *page* to *url* and block until the network settles.

    Raises:
        PageLoadError: If navigation fails or the document returns a
            4xx/5xx status.  There is no retry.
    """
    cfg = config or settings
    print(f"[FETCH] Loading {url} …")
    try:
        response = page.goto(url, wait_until=cfg.wait_until)
    except Exception as exc:  # noqa: BLE001
        raise PageLoadError(url, str(exc)) from exc

    if response is not None and not response.ok:
        raise PageLoadError(url, f"HTTP {response.status}")
    print(f"[FETCH] ✓ Page loaded: {url}")
