#!/usr/bin/env python3
"""
Dashboard utilities package.
"""

from .timezone_utils import (
    get_system_timezone,
    get_display_timezone,
    now_in_timezone,
    format_for_display,
    date_stamp
)

__all__ = [
    'get_system_timezone',
    'get_display_timezone',
    'now_in_timezone',
    'format_for_display',
    'date_stamp'
]
