"""Tests for the finding, scan and clean models."""

from __future__ import annotations

from pathlib import Path

import pytest

from diskard.models import CleanResult, DeleteMode, ScanResult
from diskard.models.finding import Category, RiskLevel
from tests.factories import make_finding


class TestRiskLevel:
    def test_ordering(self):
        assert RiskLevel.SAFE < RiskLevel.MODERATE < RiskLevel.RISKY

    def test_display(self):
        assert str(RiskLevel.SAFE) == "safe"
        assert str(RiskLevel.RISKY) == "risky"

    @pytest.mark.parametrize("value", ["moderate", "Moderate", " MODERATE "])
    def test_from_str(self, value):
        assert RiskLevel.from_str(value) is RiskLevel.MODERATE

    def test_from_str_unknown(self):
        with pytest.raises(ValueError):
            RiskLevel.from_str("dangerous")

    def test_emoji(self):
        assert RiskLevel.SAFE.emoji != RiskLevel.RISKY.emoji


class TestCategory:
    def test_label(self):
        assert Category.NODE.label == "Node.js"
        assert str(Category.VSCODE) == "VS Code"

    def test_key(self):
        assert Category.HUGGINGFACE.key == "huggingface"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("node", Category.NODE), ("Node.js", Category.NODE), ("vscode", Category.VSCODE), ("VS Code", Category.VSCODE)],
    )
    def test_from_key(self, value, expected):
        assert Category.from_key(value) is expected

    def test_from_key_unknown(self):
        with pytest.raises(ValueError):
            Category.from_key("cobol")


class TestFinding:
    def test_size_human(self):
        assert make_finding(size=2048).size_human == "2.0 KB"

    def test_to_dict(self):
        finding = make_finding("/tmp/x", size=10, risk=RiskLevel.MODERATE, category=Category.RUST)
        assert finding.to_dict() == {
            "path": str(Path("/tmp/x")),
            "category": "Rust",
            "risk": "moderate",
            "size_bytes": 10,
            "description": "test finding",
        }


class TestScanResult:
    def test_to_dict(self):
        result = ScanResult(
            findings=[make_finding(size=1024)],
            total_reclaimable=1024,
            scan_duration=0.5,
            errors=["boom"],
        )
        data = result.to_dict()
        assert data["total_reclaimable_bytes"] == 1024
        assert data["total_reclaimable_human"] == "1.0 KB"
        assert data["scan_duration_ms"] == 500
        assert data["errors"] == ["boom"]
        assert len(data["findings"]) == 1


class TestCleanResult:
    def test_defaults(self):
        result = CleanResult()
        assert result.deleted_count == 0
        assert result.freed_bytes == 0
        assert result.errors == []

    def test_failed_paths(self):
        result = CleanResult(errors=[("/a", "denied"), ("/b", "busy")])
        assert result.failed_paths == {"/a", "/b"}

    def test_to_dict(self):
        result = CleanResult(deleted_count=1, freed_bytes=5, errors=[("/a", "denied")])
        assert result.to_dict() == {
            "deleted_count": 1,
            "freed_bytes": 5,
            "errors": [{"path": "/a", "error": "denied"}],
        }

    def test_delete_mode_values(self):
        assert DeleteMode("dry-run") is DeleteMode.DRY_RUN
