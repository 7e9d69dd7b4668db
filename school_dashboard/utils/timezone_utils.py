#!/usr/bin/env python3
"""
Timezone utilities for consistent time handling across the dashboard.
Report timestamps and export file names are produced here.
"""

import datetime
import pytz
from typing import Optional

from ..config import config

def get_system_timezone() -> pytz.BaseTzInfo:
    """Get the configured system timezone."""
    return pytz.timezone(config.DEFAULT_TIMEZONE)

def get_display_timezone() -> pytz.BaseTzInfo:
    """Get the configured display timezone."""
    return pytz.timezone(config.DISPLAY_TIMEZONE)

def now_in_timezone(timezone: Optional[str] = None) -> datetime.datetime:
    """Get current time in specified timezone."""
    tz = pytz.timezone(timezone) if timezone else get_system_timezone()
    return datetime.datetime.now(tz)

def format_for_display(dt: datetime.datetime, timezone: Optional[str] = None) -> str:
    """Format datetime for display in configured timezone."""
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)

    display_tz = pytz.timezone(timezone) if timezone else get_display_timezone()
    local_dt = dt.astimezone(display_tz)
    return local_dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def date_stamp(dt: Optional[datetime.datetime] = None) -> str:
    """YYYY-MM-DD stamp in the display timezone, used in export file names."""
    dt = dt or now_in_timezone()
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(get_display_timezone()).strftime('%Y-%m-%d')
