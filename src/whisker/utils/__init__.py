"""Utility helpers for Whisker."""
