"""Recognizer for Gradle and Maven caches."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer, CacheLocation


class GradleCacheRecognizer(CacheDirRecognizer):
    """Gradle build cache, wrapper distributions and the Maven local repository."""

    id = "gradle-cache"
    name = "Gradle cache"
    category = Category.GRADLE

    def _locations(self, home: Path) -> tuple[CacheLocation, ...]:
        return (
            CacheLocation(
                home / ".gradle" / "caches",
                RiskLevel.SAFE,
                "Gradle build and dependency cache — rebuilt on next build",
            ),
            CacheLocation(
                home / ".gradle" / "wrapper" / "dists",
                RiskLevel.MODERATE,
                "Gradle wrapper distributions — re-downloaded when needed",
            ),
            CacheLocation(
                home / ".m2" / "repository",
                RiskLevel.MODERATE,
                "Maven local repository — re-downloaded on next build",
            ),
        )
