"""High-level runner for the export pipeline.

``run_export`` is the single public function in this module.  It drives one
page through every stage in order::

    Start → PageLoaded → StylesCollected → CssResolved → DocumentWrapped
          → Inlined → MainExtracted → Written → End

Each browser session is owned by a ``with`` block, so it is released on
success and on failure alike.  The output file is only touched in the final
stage: a fatal error anywhere earlier leaves the previous export (if any)
exactly as it was.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from canvas_export.config import Settings, settings
from canvas_export.pipeline.browser import browser_session, fetch_page
from canvas_export.pipeline.extractor import extract_main, write_output
from canvas_export.pipeline.inliner import build_wrapped_document, inline_css
from canvas_export.pipeline.models import ExportResult
from canvas_export.pipeline.styles import (
    collect_main_html,
    collect_styles,
    resolve_external_css,
)


def run_export(
    url: Optional[str] = None,
    output_path: Optional[Path] = None,
    config: Optional[Settings] = None,
) -> ExportResult:
    """Export the main content of *url* with its CSS inlined.

    Args:
        url: Page to export.  Defaults to ``settings.target_url``.
        output_path: Destination file.  Defaults to ``settings.output_path``.
        config: Optional settings override (used by tests and the CLI).

    Returns:
        An :class:`~canvas_export.pipeline.models.ExportResult` carrying the
        written HTML and the per-stylesheet report.

    Raises:
        canvas_export.errors.PageLoadError: If the page cannot be loaded.
        Any error from DOM evaluation, the inlining transform, or the file
        write propagates unchanged.
    """
    cfg = config or settings
    target = url or cfg.target_url
    destination = Path(output_path or cfg.output_path)

    # ------------------------------------------------------------------
    # Session 1: load the page, read its styles, then fetch stylesheets.
    # The main markup is captured before the session navigates away.
    # ------------------------------------------------------------------
    with browser_session(cfg) as page:
        fetch_page(page, target, cfg)
        bundle = collect_styles(page)
        main_html = collect_main_html(page)
        report = resolve_external_css(page, bundle.stylesheet_urls, bundle.inline_css)

    # ------------------------------------------------------------------
    # Wrap, inline, and re-extract in an independent session.
    # ------------------------------------------------------------------
    wrapped = build_wrapped_document(report.css, main_html)
    inlined = inline_css(
        wrapped,
        preserve_media_queries=True,
        apply_style_tags=True,
        inline_pseudo_elements=True,
    )
    final_html = extract_main(inlined, cfg)

    write_output(final_html, destination)
    if report.failed:
        print(f"[DONE] {len(report.failed)} stylesheet(s) could not be fetched.")
    print(f"[DONE] Main content with inline styles saved to {destination}")

    return ExportResult(url=target, output_path=destination, html=final_html, report=report)
