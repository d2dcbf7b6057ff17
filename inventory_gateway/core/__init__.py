"""Core constants, errors and logging helpers."""
