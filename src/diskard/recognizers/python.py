"""Recognizer for the pip download cache."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer
from diskard.utils import xdg_cache_home


class PipCacheRecognizer(CacheDirRecognizer):
    """pip wheel and HTTP cache."""

    id = "pip-cache"
    name = "pip cache"
    category = Category.PYTHON
    risk = RiskLevel.SAFE
    description = "pip package cache — re-downloaded on next install"

    def _candidate_dirs(self, home: Path) -> tuple[Path, ...]:
        return (home / "Library/Caches/pip", xdg_cache_home() / "pip")
