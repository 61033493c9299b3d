"""Recognizers for the npm cache and project node_modules directories."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer, ProjectArtifactRecognizer


class NpmCacheRecognizer(CacheDirRecognizer):
    """npm package cache."""

    id = "npm-cache"
    name = "npm cache"
    category = Category.NODE
    risk = RiskLevel.SAFE
    description = "npm package cache — repopulated on next install"
    _relative_dirs = (".npm",)


class NodeModulesRecognizer(ProjectArtifactRecognizer):
    """Installed dependencies of JavaScript projects."""

    id = "node-modules"
    name = "node_modules"
    category = Category.NODE
    risk = RiskLevel.MODERATE
    marker = "package.json"
    artifact_dir = "node_modules"

    def _describe(self, project: Path) -> str:
        return f"Node.js dependencies for {project.name} — restored with npm install"
