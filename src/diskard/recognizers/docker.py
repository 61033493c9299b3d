"""Recognizer for Docker Desktop's data directory."""

from __future__ import annotations

from diskard.models.finding import Category, RiskLevel
from diskard.models.recognizer import CacheDirRecognizer


class DockerDataRecognizer(CacheDirRecognizer):
    """Docker Desktop VM disk: images, containers and volumes together."""

    id = "docker-data"
    name = "Docker data"
    category = Category.DOCKER
    risk = RiskLevel.RISKY
    description = "Docker Desktop data — includes images, containers, and volumes"
    _relative_dirs = ("Library/Containers/com.docker.docker/Data",)
