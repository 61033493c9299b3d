"""Interactive terminal UI."""
