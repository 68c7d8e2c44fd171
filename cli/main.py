"""canvas-export CLI — entry-point for the export pipeline.

Usage:
    python cli/main.py --help

Commands:
    export    → run the full pipeline and write the inlined fragment
    styles    → list the styles a page declares, without exporting
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from canvas_export.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from canvas_export.config import settings
from canvas_export.pipeline.browser import browser_session, fetch_page
from canvas_export.pipeline.runner import run_export
from canvas_export.pipeline.styles import collect_styles

app = typer.Typer(
    name="canvas-export",
    help="Export a page's main content with inlined CSS for Canvas import.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------
@app.command("export")
def export(
    url: Optional[str] = typer.Option(None, help="Page to export (default: EXPORT_URL)."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: EXPORT_OUTPUT)."
    ),
) -> None:
    """Fetch a page, inline its CSS and save the main content to a file."""
    target = url or settings.target_url
    typer.echo(f"[export] Exporting {target!r} …")
    try:
        result = run_export(url=target, output_path=output)
    except Exception as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    report = result.report
    typer.echo(
        f"[export] Stylesheets: {len(report.succeeded)} fetched, "
        f"{len(report.failed)} failed"
    )
    typer.echo(f"Main content with inline styles saved to {result.output_path}")


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------
@app.command("styles")
def styles(
    url: Optional[str] = typer.Option(None, help="Page to inspect (default: EXPORT_URL)."),
) -> None:
    """Load a page and list its inline style blocks and stylesheet links."""
    target = url or settings.target_url
    try:
        with browser_session() as page:
            fetch_page(page, target)
            bundle = collect_styles(page)
    except Exception as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    typer.echo(f"Inline <style> blocks: {len(bundle.inline_styles)}")
    for i, block in enumerate(bundle.inline_styles, start=1):
        typer.echo(f"  {i}. {len(block)} chars")
    typer.echo(f"Linked stylesheets: {len(bundle.stylesheet_urls)}")
    for href in bundle.stylesheet_urls:
        typer.echo(f"  - {href}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
