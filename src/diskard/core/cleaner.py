"""Deletion engine: trash, permanent removal and dry runs."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from send2trash import send2trash

from diskard.models.clean_result import CleanResult, DeleteMode
from diskard.models.finding import Finding

log = logging.getLogger(__name__)


class DeleteError(Exception):
    """A single path could not be removed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


def delete_path(path: Path, mode: DeleteMode) -> None:
    """Remove one path according to *mode*.

    A path that no longer exists is treated as already deleted.
    Symlinks are removed themselves, never their targets.
    Dangling symlinks are unlinked, never trashed.

    Raises:
        DeleteError: if the path exists and could not be removed.
    """
    if mode is DeleteMode.DRY_RUN or not os.path.lexists(path):
        return

    try:
        if mode is DeleteMode.TRASH and path.exists():
            send2trash(os.fspath(path))
        elif path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise DeleteError(path, f"{'Trash' if mode is DeleteMode.TRASH else 'IO'} error: {e}") from e


def clean_paths(items: Iterable[tuple[Path, int]], mode: DeleteMode) -> CleanResult:
    """Delete ``(path, size_bytes)`` pairs one at a time.

    Failures are collected in ``CleanResult.errors`` and never stop the
    batch.  In DRY_RUN mode every item counts as deleted.
    """
    result = CleanResult()
    for path, size_bytes in items:
        try:
            delete_path(path, mode)
        except DeleteError as e:
            log.warning("Could not delete %s: %s", path, e.message)
            result.errors.append((str(path), e.message))
            continue
        result.deleted_count += 1
        result.freed_bytes += size_bytes
        log.debug("Deleted (%s): %s", mode.value, path)

    log.info(
        "Clean finished (%s): %d deleted, %d bytes, %d errors",
        mode.value,
        result.deleted_count,
        result.freed_bytes,
        len(result.errors),
    )
    return result


def clean(findings: Iterable[Finding], mode: DeleteMode) -> CleanResult:
    """Delete the given findings using the specified mode."""
    return clean_paths(((f.path, f.size_bytes) for f in findings), mode)
