"""Recognizer for Cargo build output and the crate download cache."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.models.recognizer import ProjectArtifactRecognizer
from diskard.utils import dir_size, home_dir, path_mtime


class CargoTargetRecognizer(ProjectArtifactRecognizer):
    """Cargo ``target/`` directories plus the registry download cache."""

    id = "cargo-target"
    name = "Cargo target dirs"
    category = Category.RUST
    risk = RiskLevel.MODERATE
    marker = "Cargo.toml"
    artifact_dir = "target"
    min_artifact_size = 1024 * 1024

    def _describe(self, project: Path) -> str:
        return f"Rust build artifacts for {project.name}"

    def scan(self) -> list[Finding]:
        home = home_dir()
        if home is None:
            return []

        findings: list[Finding] = []
        registry_cache = home / ".cargo" / "registry" / "cache"
        if registry_cache.is_dir():
            size = dir_size(registry_cache)
            if size > 0:
                findings.append(
                    Finding(
                        path=registry_cache,
                        category=Category.RUST,
                        risk=RiskLevel.SAFE,
                        size_bytes=size,
                        description="Cargo registry cache — re-downloaded when needed",
                        last_modified=path_mtime(registry_cache),
                    )
                )

        findings.extend(super().scan())
        return findings
