# File: utils/__init__.py
"""Pure Python utilities for Habit Fairy.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Submodules:
    - dt_utils: Date parsing, today resolution, day-window helpers

Usage:
    from .utils import dt_utils
"""

from . import dt_utils

__all__ = ["dt_utils"]
