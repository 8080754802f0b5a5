"""Shared helpers for date encoding, number parsing and logging."""
