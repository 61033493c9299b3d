"""Recognizer for Claude Code logs and session transcripts."""

from __future__ import annotations

from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer, CacheLocation


class ClaudeDataRecognizer(CacheDirRecognizer):
    id = "claude-data"
    name = "Claude Code data"
    category = Category.CLAUDE

    def _locations(self, home: Path) -> tuple[CacheLocation, ...]:
        claude = home / ".claude"
        return (
            CacheLocation(claude / "debug", RiskLevel.SAFE, "Claude Code debug logs"),
            CacheLocation(
                claude / "projects",
                RiskLevel.MODERATE,
                "Claude Code session transcripts and project data",
            ),
        )
