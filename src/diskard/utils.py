"""Shared filesystem and formatting helpers."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path

log = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(B|KB|MB|GB|TB)?$")
_SIZE_UNITS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3, "TB": 1024**4}
_DURATION_UNITS = {"m": 60, "h": 3600, "d": 86400, "w": 604800}


def home_dir() -> Path | None:
    """Return the user's home directory, or None if it cannot be determined."""
    try:
        return Path.home()
    except RuntimeError:
        return None


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache."""
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def dir_size(path: Path) -> int:
    """Total size of a file or directory tree in bytes; 0 if it does not exist.

    Symlinks count as the link itself and are never followed.  Directory
    trees are summed by GNU ``find`` when it is available, otherwise by
    walking with ``os.scandir``.
    """
    try:
        if path.is_symlink() or path.is_file():
            return path.lstat().st_size
    except OSError:
        return 0
    if not path.is_dir():
        return 0
    try:
        return _tree_size_find(path)
    except (OSError, ValueError, subprocess.SubprocessError):
        log.debug("find unavailable for %s, walking instead", path)
        return _tree_size_walk(path)


def _tree_size_find(root: Path) -> int:
    proc = subprocess.run(
        ["find", str(root), "-type", "f", "-printf", "%s\n"],
        capture_output=True,
        timeout=60,
        check=True,
    )
    return sum(int(size) for size in proc.stdout.split())


def _tree_size_walk(root: Path) -> int:
    total = 0
    pending = [os.fspath(root)]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError:
            log.debug("Cannot read directory: %s", directory)
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    total += entry.stat(follow_symlinks=False).st_size
            except OSError:
                log.debug("Cannot stat: %s", entry.path)
    return total


def path_mtime(path: Path) -> datetime | None:
    """Modification time of *path* as an aware UTC datetime, or None."""
    try:
        return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    except OSError:
        return None


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def parse_size(text: str) -> int:
    """Parse '10MB', '1.5 GB' or a bare byte count into bytes.

    Raises:
        ValueError: if *text* is not a recognised size.
    """
    match = _SIZE_RE.match(text.strip().upper())
    if match is None:
        raise ValueError(f"Invalid size: {text!r}. Use e.g. 10MB, 1GB")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit or "B"])


def parse_duration(text: str) -> timedelta:
    """Parse '30m', '12h', '7d' or '2w' into a timedelta.

    Raises:
        ValueError: if *text* is not a recognised duration.
    """
    value = text.strip().lower()
    if not value or value[-1] not in _DURATION_UNITS or not value[:-1].isdigit():
        raise ValueError(f"Invalid duration: {text!r}. Use e.g. 7d, 30d, 1h, 2w")
    return timedelta(seconds=int(value[:-1]) * _DURATION_UNITS[value[-1]])


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
