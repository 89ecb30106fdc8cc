"""Sunboard - project and task tracking with a multi-perspective review workflow."""

__version__ = "1.0.0"
