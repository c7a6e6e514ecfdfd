"""Shared constants and formatting helpers."""
