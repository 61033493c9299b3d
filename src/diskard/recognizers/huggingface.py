"""Recognizer for the HuggingFace hub cache."""

from __future__ import annotations

import os
from pathlib import Path

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer


class HuggingFaceCacheRecognizer(CacheDirRecognizer):
    """Downloaded models and datasets; honours $HF_HOME."""

    id = "huggingface-cache"
    name = "HuggingFace cache"
    category = Category.HUGGINGFACE
    risk = RiskLevel.MODERATE
    description = "HuggingFace model and dataset cache — re-downloaded when needed"

    def _candidate_dirs(self, home: Path) -> tuple[Path, ...]:
        hf_home = os.environ.get("HF_HOME")
        if hf_home:
            return (Path(hf_home).expanduser(),)
        return (home / ".cache" / "huggingface",)
