"""Exceptions raised by the export pipeline."""


class ExportError(Exception):
    """Base class for fatal export failures."""


class PageLoadError(ExportError):
    """The target page could not be loaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load {url}: {reason}")
        self.url = url
        self.reason = reason
