"""Centralised settings for the Canvas export pipeline.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_TARGET_URL = "https://cs362.alexulbrich.com/lectures/git-and-github/"


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Source / destination
    # ------------------------------------------------------------------
    target_url: str = field(
        default_factory=lambda: os.environ.get("EXPORT_URL", DEFAULT_TARGET_URL)
    )
    output_path: Path = field(
        default_factory=lambda: Path(os.environ.get("EXPORT_OUTPUT", "output-main.html"))
    )

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    headless: bool = field(default_factory=lambda: _env_flag("EXPORT_HEADLESS", "true"))
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NAVIGATION_TIMEOUT", "0"))
    )
    wait_until: str = field(
        default_factory=lambda: os.environ.get("EXPORT_WAIT_UNTIL", "networkidle")
    )

    @property
    def navigation_timeout_ms(self) -> float | None:
        """Timeout in milliseconds for Playwright, or ``None`` for its default."""
        if self.navigation_timeout <= 0:
            return None
        return self.navigation_timeout * 1000


# Module-level singleton, import this everywhere:
#   from canvas_export.config import settings
settings = Settings()
