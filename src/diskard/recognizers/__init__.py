"""Built-in recognizers.

The set is fixed: ``all_recognizers()`` builds it explicitly and in a
stable order, which is also the order recognizers run in.
"""

from __future__ import annotations

from diskard.models.recognizer import Recognizer
from diskard.recognizers.claude import ClaudeDataRecognizer
from diskard.recognizers.cocoapods import CocoaPodsCacheRecognizer
from diskard.recognizers.docker import DockerDataRecognizer
from diskard.recognizers.generic import DsStoreRecognizer
from diskard.recognizers.gradle import GradleCacheRecognizer
from diskard.recognizers.homebrew import HomebrewCacheRecognizer
from diskard.recognizers.huggingface import HuggingFaceCacheRecognizer
from diskard.recognizers.node import NodeModulesRecognizer, NpmCacheRecognizer
from diskard.recognizers.ollama import OllamaModelsRecognizer
from diskard.recognizers.python import PipCacheRecognizer
from diskard.recognizers.rust import CargoTargetRecognizer
from diskard.recognizers.vscode import VSCodeExtensionsRecognizer
from diskard.recognizers.xcode import (
    ArchivesRecognizer,
    DerivedDataRecognizer,
    DeviceSupportRecognizer,
    PreviewsRecognizer,
    SimulatorsRecognizer,
)


def all_recognizers() -> list[Recognizer]:
    """Return a fresh instance of every built-in recognizer."""
    return [
        DerivedDataRecognizer(),
        DeviceSupportRecognizer(),
        SimulatorsRecognizer(),
        ArchivesRecognizer(),
        PreviewsRecognizer(),
        NpmCacheRecognizer(),
        NodeModulesRecognizer(),
        HomebrewCacheRecognizer(),
        PipCacheRecognizer(),
        CargoTargetRecognizer(),
        DockerDataRecognizer(),
        OllamaModelsRecognizer(),
        HuggingFaceCacheRecognizer(),
        ClaudeDataRecognizer(),
        VSCodeExtensionsRecognizer(),
        GradleCacheRecognizer(),
        CocoaPodsCacheRecognizer(),
        DsStoreRecognizer(),
    ]


__all__ = ["all_recognizers"]
