from __future__ import annotations

from datetime import datetime
from pathlib import Path

from diskard.models.finding import Category, Finding, RiskLevel


def write_file(path: Path, size: int) -> Path:
    """Create *path* (and its parents) holding exactly *size* bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


def make_finding(
    path: str | Path = "/tmp/finding",
    size: int = 100,
    risk: RiskLevel = RiskLevel.SAFE,
    category: Category = Category.GENERIC,
    description: str = "test finding",
    last_modified: datetime | None = None,
) -> Finding:
    return Finding(
        path=Path(path),
        category=category,
        risk=risk,
        size_bytes=size,
        description=description,
        last_modified=last_modified,
    )
