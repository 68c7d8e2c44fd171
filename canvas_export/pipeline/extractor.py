"""Re-render the inlined document and persist its main content."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from canvas_export.config import Settings
from canvas_export.pipeline.browser import browser_session
from canvas_export.pipeline.styles import collect_main_html


def extract_main(inlined_document: str, config: Optional[Settings] = None) -> str:
    """Load *inlined_document* in a fresh session and return its main content.

    Returns the ``<main>`` element's outer HTML, falling back to the full
    body contents when the document has no ``<main>``.
    """
    with browser_session(config) as page:
        page.set_content(inlined_document)
        html = collect_main_html(page)
    print(f"[EXTRACT] ✓ Extracted {len(html)} chars of main content.")
    return html


def write_output(html: str, path: Path) -> Path:
    """Write *html* to *path*, replacing any previous export."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
