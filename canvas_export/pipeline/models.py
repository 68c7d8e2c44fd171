"""Data models for the export pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class StyleBundle:
    """Styles discovered on the loaded page, both in document order."""

    inline_styles: Tuple[str, ...] = ()
    stylesheet_urls: Tuple[str, ...] = ()

    @property
    def inline_css(self) -> str:
        return "\n".join(self.inline_styles)


@dataclass(frozen=True)
class StylesheetResult:
    """Outcome of fetching one external stylesheet."""

    url: str
    css: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CssReport:
    """Inline CSS plus every external stylesheet result, in fetch order."""

    inline_css: str = ""
    results: List[StylesheetResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[StylesheetResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> List[StylesheetResult]:
        return [r for r in self.results if not r.ok]

    @property
    def css(self) -> str:
        """The resolved CSS: inline styles followed by each fetched body."""
        external = "".join(f"{r.css}\n" for r in self.succeeded)
        return f"{self.inline_css}\n{external}"


@dataclass
class ExportResult:
    """The final artifact of one pipeline run."""

    url: str
    output_path: Path
    html: str
    report: CssReport
