"""Scan options and scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.utils import bytes_to_human


class SortOrder(str, Enum):
    SIZE = "size"
    RISK = "risk"
    CATEGORY = "category"


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Filter and ordering settings for one scan invocation."""

    max_risk: RiskLevel = RiskLevel.RISKY
    min_size: int = 0
    category: Category | None = None
    older_than: timedelta | None = None
    sort: SortOrder = SortOrder.SIZE


@dataclass(slots=True)
class ScanResult:
    """Filtered, ordered findings from one scan."""

    findings: list[Finding] = field(default_factory=list)
    total_reclaimable: int = 0
    scan_duration: float = 0.0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "findings": [f.to_dict() for f in self.findings],
            "total_reclaimable_bytes": self.total_reclaimable,
            "total_reclaimable_human": bytes_to_human(self.total_reclaimable),
            "scan_duration_ms": int(self.scan_duration * 1000),
            "errors": self.errors,
        }
