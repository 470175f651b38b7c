"""Logging, event feed and persistence helpers."""
