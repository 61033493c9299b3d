"""Recognizer for locally pulled Ollama models."""

from __future__ import annotations

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer


class OllamaModelsRecognizer(CacheDirRecognizer):
    id = "ollama-models"
    name = "Ollama models"
    category = Category.OLLAMA
    risk = RiskLevel.MODERATE
    description = "Ollama model files — re-downloaded with `ollama pull`"
    _relative_dirs = (".ollama/models",)
