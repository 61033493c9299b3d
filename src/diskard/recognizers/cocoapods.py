"""Recognizer for the CocoaPods download cache."""

from __future__ import annotations

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer


class CocoaPodsCacheRecognizer(CacheDirRecognizer):
    id = "cocoapods-cache"
    name = "CocoaPods cache"
    category = Category.COCOAPODS
    risk = RiskLevel.SAFE
    description = "CocoaPods download cache — re-downloaded on next pod install"
    _relative_dirs = ("Library/Caches/CocoaPods",)
