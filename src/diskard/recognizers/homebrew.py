"""Recognizer for the Homebrew download cache."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer
from diskard.utils import xdg_cache_home


class HomebrewCacheRecognizer(CacheDirRecognizer):
    """Homebrew bottles and source tarballs (macOS and Linuxbrew)."""

    id = "homebrew-cache"
    name = "Homebrew cache"
    category = Category.HOMEBREW
    risk = RiskLevel.SAFE
    description = "Homebrew download cache — re-downloaded when needed"

    def _candidate_dirs(self, home: Path) -> tuple[Path, ...]:
        return (home / "Library/Caches/Homebrew", xdg_cache_home() / "Homebrew")
