"""Preset library and helpers."""
