"""Cleaning result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeleteMode(str, Enum):
    TRASH = "trash"
    """Move to the system trash (recoverable)."""
    PERMANENT = "permanent"
    """Irreversible removal."""
    DRY_RUN = "dry-run"
    """Touch nothing, report what would be removed."""


@dataclass(slots=True)
class CleanResult:
    """Result of a cleaning operation."""

    deleted_count: int = 0
    freed_bytes: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def failed_paths(self) -> set[str]:
        return {path for path, _ in self.errors}

    def to_dict(self) -> dict[str, object]:
        return {
            "deleted_count": self.deleted_count,
            "freed_bytes": self.freed_bytes,
            "errors": [{"path": path, "error": message} for path, message in self.errors],
        }
