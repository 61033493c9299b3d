"""Base recognizer interface."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from diskard.models.finding import Category, Finding, RiskLevel
from diskard.utils import dir_size, home_dir, path_mtime

log = logging.getLogger(__name__)

# Directories under $HOME that are searched for project build artifacts.
PROJECT_ROOTS = ("Developer", "Projects", "src", "code")


class RecognizerError(Exception):
    """A recognizer hit an unexpected I/O failure while scanning."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"I/O error at {path}: {error.strerror or error}")
        self.path = path
        self.error = error


class Recognizer(ABC):
    """Base class for everything that finds reclaimable disk space.

    A recognizer knows where one tool keeps its caches or build output.
    ``scan()`` must never modify the filesystem.  When the location it
    looks at simply does not exist it returns an empty list; it raises
    only for unexpected I/O failures.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable unique identifier, e.g. 'xcode-derived-data'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'Xcode DerivedData'."""

    @property
    @abstractmethod
    def category(self) -> Category:
        """Ecosystem the findings belong to."""

    @abstractmethod
    def scan(self) -> list[Finding]:
        """Find reclaimable paths. MUST NOT delete anything."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


@dataclass(frozen=True, slots=True)
class CacheLocation:
    """One directory a cache recognizer reports on."""

    path: Path
    risk: RiskLevel
    description: str


class CacheDirRecognizer(Recognizer, ABC):
    """Base class for recognizers that report a fixed set of directories.

    Subclasses set ``risk``, ``description`` and ``_relative_dirs``
    (relative to the home directory), or override ``_locations()`` when
    the directories carry different risks.  One finding is emitted per
    existing, non-empty directory.
    """

    risk: RiskLevel = RiskLevel.SAFE
    description: str = ""
    _relative_dirs: tuple[str, ...] = ()

    def _candidate_dirs(self, home: Path) -> tuple[Path, ...]:
        return tuple(home / rel for rel in self._relative_dirs)

    def _locations(self, home: Path) -> tuple[CacheLocation, ...]:
        return tuple(CacheLocation(d, self.risk, self.description) for d in self._candidate_dirs(home))

    def scan(self) -> list[Finding]:
        home = home_dir()
        if home is None:
            return []

        findings: list[Finding] = []
        seen: set[Path] = set()
        for location in self._locations(home):
            if location.path in seen or not location.path.is_dir():
                continue
            seen.add(location.path)
            size = dir_size(location.path)
            if size == 0:
                continue
            findings.append(
                Finding(
                    path=location.path,
                    category=self.category,
                    risk=location.risk,
                    size_bytes=size,
                    description=location.description,
                    last_modified=path_mtime(location.path),
                )
            )
        return findings


def walk_tree(
    root: Path,
    max_depth: int,
    *,
    skip_hidden: bool = False,
    prune: frozenset[str] = frozenset(),
) -> Iterator[tuple[Path, list[str], list[str]]]:
    """Depth-limited ``os.walk`` that never follows symlinks.

    Yields ``(directory, dirnames, filenames)`` for directories up to
    ``max_depth - 1`` levels below *root*, so files are seen up to
    ``max_depth`` levels deep.  Directories named in *prune* are listed
    in ``dirnames`` but never descended into.
    """
    root_depth = len(root.parts)

    def _on_error(exc: OSError) -> None:
        log.debug("Cannot read directory: %s", exc.filename)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current = Path(dirpath)
        depth = len(current.parts) - root_depth
        visible = [d for d in dirnames if not (skip_hidden and d.startswith("."))]
        yield current, visible, filenames
        if depth >= max_depth - 1:
            dirnames[:] = []
        else:
            dirnames[:] = [d for d in visible if d not in prune]


class ProjectArtifactRecognizer(Recognizer, ABC):
    """Base class for build output that lives next to a project marker file.

    Walks the common project roots under $HOME looking for ``marker``
    (e.g. ``Cargo.toml``) and reports the sibling ``artifact_dir``
    (e.g. ``target``) when it is larger than ``min_artifact_size``.
    """

    marker: str
    artifact_dir: str
    risk: RiskLevel = RiskLevel.MODERATE
    min_artifact_size: int = 0
    max_depth: int = 4

    @abstractmethod
    def _describe(self, project: Path) -> str:
        """Description for the artifact directory of *project*."""

    def _project_roots(self, home: Path) -> list[Path]:
        return [home / name for name in PROJECT_ROOTS]

    def scan(self) -> list[Finding]:
        home = home_dir()
        if home is None:
            return []

        findings: list[Finding] = []
        for root in self._project_roots(home):
            if not root.is_dir():
                continue
            for directory, dirnames, filenames in walk_tree(
                root, self.max_depth, skip_hidden=True, prune=frozenset({self.artifact_dir})
            ):
                if self.marker not in filenames or self.artifact_dir not in dirnames:
                    continue
                artifact = directory / self.artifact_dir
                size = dir_size(artifact)
                if size <= self.min_artifact_size:
                    continue
                findings.append(
                    Finding(
                        path=artifact,
                        category=self.category,
                        risk=self.risk,
                        size_bytes=size,
                        description=self._describe(directory),
                        last_modified=path_mtime(artifact),
                    )
                )
        return findings
