"""diskard: find and reclaim disk space used by developer tools."""

__version__ = "0.1.0"
