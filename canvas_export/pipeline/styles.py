"""Style discovery on a loaded page and sequential stylesheet resolution."""

from __future__ import annotations

from typing import Any, Iterable

from canvas_export.pipeline.models import CssReport, StyleBundle, StylesheetResult

# ---------------------------------------------------------------------------
# In-page scripts
# ---------------------------------------------------------------------------
_COLLECT_STYLES_JS = """() => ({
    inlineStyles: Array.from(document.querySelectorAll("style"), (s) => s.innerHTML),
    stylesheetUrls: Array.from(
        document.querySelectorAll('link[rel="stylesheet"]'),
        (link) => link.href,
    ).filter((href) => href),
})"""

_MAIN_HTML_JS = """() => {
    const main = document.querySelector("main");
    if (main) return main.outerHTML;
    return document.body ? document.body.innerHTML : "";
}"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_styles(page: Any) -> StyleBundle:
    """Return the inline ``<style>`` blocks and linked stylesheet URLs of *page*.

    Both sequences keep document order.  This is a pure read of the live DOM.
    """
    found = page.evaluate(_COLLECT_STYLES_JS)
    bundle = StyleBundle(
        inline_styles=tuple(found.get("inlineStyles") or ()),
        stylesheet_urls=tuple(found.get("stylesheetUrls") or ()),
    )
    print(
        f"[STYLES] Found {len(bundle.inline_styles)} inline block(s) and "
        f"{len(bundle.stylesheet_urls)} stylesheet link(s)."
    )
    return bundle


def collect_main_html(page: Any) -> str:
    """Return the ``<main>`` element's outer HTML, or the body contents without one."""
    return page.evaluate(_MAIN_HTML_JS) or ""


def _fetch_stylesheet(page: Any, url: str) -> StylesheetResult:
    try:
        response = page.goto(url)
    except Exception as exc:  # noqa: BLE001
        return StylesheetResult(url=url, error=str(exc))

    if response is None:
        return StylesheetResult(url=url, error="no response")
    if not response.ok:
        return StylesheetResult(
            url=url, error=f"HTTP {response.status}", status_code=response.status
        )
    try:
        css = response.text()
    except Exception as exc:  # noqa: BLE001
        return StylesheetResult(url=url, error=str(exc), status_code=response.status)
    return StylesheetResult(url=url, css=css, status_code=response.status)


def resolve_external_css(
    page: Any,
    urls: Iterable[str],
    inline_css: str = "",
) -> CssReport:
    """Fetch every stylesheet in *urls* one at a time through the same *page*.

    A failing stylesheet never aborts the run: it is reported once on stdout
    and recorded as a failed :class:`StylesheetResult` in the returned report.
    """
    report = CssReport(inline_css=inline_css)
    for url in urls:
        result = _fetch_stylesheet(page, url)
        if result.ok:
            print(f"[STYLES] ✓ {url} ({len(result.css or '')} chars)")
        else:
            print(f"[STYLES] ✗ Failed stylesheet {url}: {result.error}")
        report.results.append(result)
    return report
