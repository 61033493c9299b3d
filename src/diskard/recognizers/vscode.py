"""Recognizer for superseded VS Code extension versions."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from pathlib import Path

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.models.recognizer import Recognizer, RecognizerError
from diskard.utils import dir_size, home_dir, path_mtime

log = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"(\d+)")


def strip_version_suffix(name: str) -> str:
    """'publisher.name-1.2.3' -> 'publisher.name'.

    Names without a version-like suffix are returned unchanged.
    """
    base, sep, version = name.rpartition("-")
    if sep and version[:1].isdigit():
        return base
    return name


def _version_key(path: Path) -> list[int | str]:
    # Compare numeric runs as numbers so 1.10.0 sorts after 1.9.0.
    return [int(part) if part.isdigit() else part for part in _NUMBER_RE.split(path.name)]


class VSCodeExtensionsRecognizer(Recognizer):
    """Older copies of extensions that VS Code keeps after an update."""

    id = "vscode-extensions"
    name = "VS Code extensions"
    category = Category.VSCODE

    def scan(self) -> list[Finding]:
        home = home_dir()
        if home is None:
            return []
        extensions_dir = home / ".vscode" / "extensions"
        if not extensions_dir.is_dir():
            return []

        versions: dict[str, list[Path]] = defaultdict(list)
        try:
            for path in extensions_dir.iterdir():
                if path.is_dir():
                    versions[strip_version_suffix(path.name)].append(path)
        except OSError as e:
            raise RecognizerError(extensions_dir, e) from e

        findings: list[Finding] = []
        for ext_name, paths in sorted(versions.items()):
            if len(paths) <= 1:
                continue
            paths.sort(key=_version_key)
            for old in paths[:-1]:
                size = dir_size(old)
                if size == 0:
                    continue
                findings.append(
                    Finding(
                        path=old,
                        category=Category.VSCODE,
                        risk=RiskLevel.MODERATE,
                        size_bytes=size,
                        description=f"Old version of VS Code extension {ext_name}",
                        last_modified=path_mtime(old),
                    )
                )
        log.debug("Found %d superseded VS Code extension versions", len(findings))
        return findings
