"""Utility modules for NeuroEnglish."""

from .duration import format_duration

__all__ = ["format_duration"]
