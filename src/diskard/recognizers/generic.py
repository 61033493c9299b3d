"""Recognizer for scattered .DS_Store files."""

from __future__ import annotations

import logging

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.models.recognizer import Recognizer, walk_tree
from diskard.utils import home_dir

log = logging.getLogger(__name__)

_FILE_NAME = ".DS_Store"
_SCAN_ROOTS = ("Developer", "Projects", "Documents", "Desktop")
_MAX_DEPTH = 6


class DsStoreRecognizer(Recognizer):
    """All .DS_Store files under the usual work folders, reported as one finding.

    The finding's path is a ``**/.DS_Store`` pattern, not a real
    filesystem location, and it carries no modification time.
    """

    id = "ds-store"
    name = ".DS_Store files"
    category = Category.GENERIC

    def scan(self) -> list[Finding]:
        home = home_dir()
        if home is None:
            return []

        total_size = 0
        count = 0
        for name in _SCAN_ROOTS:
            root = home / name
            if not root.is_dir():
                continue
            for directory, _dirnames, filenames in walk_tree(root, _MAX_DEPTH):
                if _FILE_NAME not in filenames:
                    continue
                candidate = directory / _FILE_NAME
                try:
                    if candidate.is_file():
                        total_size += candidate.lstat().st_size
                        count += 1
                except OSError:
                    log.debug("Cannot stat: %s", candidate)

        if count == 0:
            return []

        return [
            Finding(
                path=home / "**" / _FILE_NAME,
                category=Category.GENERIC,
                risk=RiskLevel.SAFE,
                size_bytes=total_size,
                description=f"{count} .DS_Store files — macOS folder metadata, safe to delete",
                last_modified=None,
            )
        ]
