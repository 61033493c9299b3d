"""Finding dataclass and its classification enums."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from diskard.utils import bytes_to_human


class RiskLevel(IntEnum):
    """How safe a finding is to delete. Ordered: SAFE < MODERATE < RISKY."""

    SAFE = 0
    """Caches and build artifacts that regenerate automatically."""
    MODERATE = 1
    """Can be regenerated, but may cost time or bandwidth."""
    RISKY = 2
    """May hold user data or require manual reconfiguration."""

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def emoji(self) -> str:
        return _RISK_EMOJI[self]

    @classmethod
    def from_str(cls, value: str) -> RiskLevel:
        """Parse 'safe', 'moderate' or 'risky' (case-insensitive).

        Raises:
            ValueError: for any other value.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown risk level: {value!r}") from None


_RISK_EMOJI = {
    RiskLevel.SAFE: "🟢",
    RiskLevel.MODERATE: "🟡",
    RiskLevel.RISKY: "🔴",
}


class Category(str, Enum):
    """Ecosystem or tool a finding belongs to. The value is the display name."""

    XCODE = "Xcode"
    NODE = "Node.js"
    HOMEBREW = "Homebrew"
    PYTHON = "Python"
    RUST = "Rust"
    DOCKER = "Docker"
    OLLAMA = "Ollama"
    HUGGINGFACE = "HuggingFace"
    CLAUDE = "Claude"
    VSCODE = "VS Code"
    GRADLE = "Gradle"
    COCOAPODS = "CocoaPods"
    GENERIC = "Generic"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """Lowercase identifier used on the command line, e.g. 'vscode'."""
        return self.name.lower()

    @classmethod
    def from_key(cls, value: str) -> Category:
        """Parse a category by key ('node') or display name ('Node.js').

        Raises:
            ValueError: if no category matches.
        """
        needle = value.strip().lower()
        for category in cls:
            if needle in (category.key, category.value.lower()):
                return category
        raise ValueError(f"Unknown category: {value!r}")


@dataclass(frozen=True, slots=True)
class Finding:
    """A single reclaimable path reported by a recognizer.

    ``size_bytes`` is a snapshot taken at scan time and is never
    re-validated before deletion.  ``last_modified`` is None when the
    recognizer cannot tell how old the data is (e.g. aggregate findings).
    """

    path: Path
    category: Category
    risk: RiskLevel
    size_bytes: int
    description: str
    last_modified: datetime | None = None

    @property
    def size_human(self) -> str:
        return bytes_to_human(self.size_bytes)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "category": self.category.value,
            "risk": str(self.risk),
            "size_bytes": self.size_bytes,
            "description": self.description,
        }
