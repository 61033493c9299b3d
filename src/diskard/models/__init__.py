"""diskard data models."""

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.models.recognizer import (
    CacheDirRecognizer,
    CacheLocation,
    ProjectArtifactRecognizer,
    Recognizer,
    RecognizerError,
)
from diskard.models.scan_result import ScanOptions, ScanResult, SortOrder
from diskard.models.clean_result import CleanResult, DeleteMode

__all__ = [
    "CacheDirRecognizer",
    "CacheLocation",
    "Category",
    "CleanResult",
    "DeleteMode",
    "Finding",
    "ProjectArtifactRecognizer",
    "Recognizer",
    "RecognizerError",
    "RiskLevel",
    "ScanOptions",
    "ScanResult",
    "SortOrder",
]
