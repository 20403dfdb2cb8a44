"""Shared helpers for path normalization and error display."""
