"""Scanning and cleaning core."""
