"""Utility functions for Sugar Diff."""

from .helpers import format_duration, load_config

__all__ = ['format_duration', 'load_config']
