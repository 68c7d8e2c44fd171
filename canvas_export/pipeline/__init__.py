"""Export pipeline: page fetch, style resolution, inlining and extraction."""

from canvas_export.pipeline.models import CssReport, ExportResult, StyleBundle, StylesheetResult
from canvas_export.pipeline.runner import run_export

__all__ = ["run_export", "StyleBundle", "StylesheetResult", "CssReport", "ExportResult"]
