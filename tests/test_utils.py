"""Tests for filesystem and formatting helpers."""

from __future__ import annotations

import os
from datetime import timedelta, timezone

import pytest

from diskard.utils import (
    bytes_to_human,
    dir_size,
    format_elapsed,
    parse_duration,
    parse_size,
    path_mtime,
)
from tests.factories import write_file


class TestBytesToHuman:
    def test_zero(self):
        assert bytes_to_human(0) == "0 B"

    def test_bytes(self):
        assert bytes_to_human(500) == "500 B"

    def test_kilobytes(self):
        assert bytes_to_human(1024) == "1.0 KB"

    def test_megabytes(self):
        assert bytes_to_human(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert bytes_to_human(int(1.5 * 1024**3)) == "1.5 GB"


class TestParseSize:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("512", 512),
            ("100B", 100),
            ("2KB", 2048),
            ("10MB", 10 * 1024**2),
            ("1GB", 1024**3),
            ("1.5 GB", int(1.5 * 1024**3)),
            ("  10mb ", 10 * 1024**2),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_size(text) == expected

    @pytest.mark.parametrize("text", ["", "MB", "10XB", "-5MB", "ten"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_size(text)


class TestParseDuration:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("30m", timedelta(minutes=30)),
            ("12h", timedelta(hours=12)),
            ("7d", timedelta(days=7)),
            ("2w", timedelta(weeks=2)),
            ("7D", timedelta(days=7)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_duration(text) == expected

    @pytest.mark.parametrize("text", ["", "7", "d", "7y", "1.5d", "-1d"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)


class TestDirSize:
    def test_sums_nested_files(self, tmp_path):
        write_file(tmp_path / "a.bin", 100)
        write_file(tmp_path / "sub" / "b.bin", 200)
        write_file(tmp_path / "sub" / "deeper" / "c.bin", 300)
        assert dir_size(tmp_path) == 600

    def test_single_file(self, tmp_path):
        f = write_file(tmp_path / "a.bin", 42)
        assert dir_size(f) == 42

    def test_missing_path(self, tmp_path):
        assert dir_size(tmp_path / "nope") == 0

    def test_empty_dir(self, tmp_path):
        assert dir_size(tmp_path) == 0

    def test_symlink_not_followed(self, tmp_path):
        target = tmp_path / "target"
        write_file(target / "big.bin", 10_000)
        link = tmp_path / "link"
        os.symlink(target, link)
        assert dir_size(link) < 10_000

    def test_walk_without_find(self, tmp_path, monkeypatch):
        def _no_find(*args, **kwargs):
            raise FileNotFoundError("find")

        monkeypatch.setattr("diskard.utils.subprocess.run", _no_find)
        write_file(tmp_path / "a.bin", 100)
        write_file(tmp_path / "sub" / "b.bin", 200)
        os.symlink(tmp_path / "sub", tmp_path / "loop")
        assert dir_size(tmp_path) == 300


class TestPathMtime:
    def test_aware_utc(self, tmp_path):
        mtime = path_mtime(tmp_path)
        assert mtime is not None
        assert mtime.tzinfo == timezone.utc

    def test_missing(self, tmp_path):
        assert path_mtime(tmp_path / "nope") is None


class TestFormatElapsed:
    def test_milliseconds(self):
        assert format_elapsed(0.25) == "250 ms"

    def test_seconds(self):
        assert format_elapsed(3.21) == "3.2s"

    def test_minutes(self):
        assert format_elapsed(125) == "2m 5s"
