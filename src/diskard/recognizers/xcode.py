"""Recognizers for Xcode build output, device symbols and simulators."""

from __future__ import annotations

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer


class DerivedDataRecognizer(CacheDirRecognizer):
    """Xcode DerivedData, regenerated on the next build."""

    id = "xcode-derived-data"
    name = "Xcode DerivedData"
    category = Category.XCODE
    risk = RiskLevel.SAFE
    description = "Xcode build artifacts — regenerated on next build"
    _relative_dirs = ("Library/Developer/Xcode/DerivedData",)


class DeviceSupportRecognizer(CacheDirRecognizer):
    """Debug symbols copied from connected iOS devices."""

    id = "xcode-device-support"
    name = "Xcode DeviceSupport"
    category = Category.XCODE
    risk = RiskLevel.MODERATE
    description = "Debug symbols for connected iOS devices — re-downloaded when needed"
    _relative_dirs = ("Library/Developer/Xcode/iOS DeviceSupport",)


class SimulatorsRecognizer(CacheDirRecognizer):
    id = "xcode-simulators"
    name = "Xcode Simulators"
    category = Category.XCODE
    risk = RiskLevel.RISKY
    description = "iOS Simulator device data — deleting removes all simulator content"
    _relative_dirs = ("Library/Developer/CoreSimulator/Devices",)


class ArchivesRecognizer(CacheDirRecognizer):
    """Archived app builds; needed to symbolicate crash reports."""

    id = "xcode-archives"
    name = "Xcode Archives"
    category = Category.XCODE
    risk = RiskLevel.RISKY
    description = "Archived app builds — needed to symbolicate old crash reports"
    _relative_dirs = ("Library/Developer/Xcode/Archives",)


class PreviewsRecognizer(CacheDirRecognizer):
    id = "xcode-previews"
    name = "Xcode Previews"
    category = Category.XCODE
    risk = RiskLevel.SAFE
    description = "SwiftUI preview cache — regenerated automatically"
    _relative_dirs = ("Library/Developer/Xcode/UserData/Previews",)
