"""
Centralized datetime handling.

Everything that needs "now" or the check-in window goes through here, so
tests can move the clock by patching ``core.datetime_utils.now``.
"""
from datetime import datetime, timedelta
from typing import Optional
from django.conf import settings
from django.utils import timezone


def now() -> datetime:
    """
    Get current datetime (timezone-aware).

    This is the single source of truth for "now".
    """
    return timezone.now()


def format_for_api(dt: Optional[datetime]) -> Optional[str]:
    """
    Format datetime for API responses (ISO 8601).

    Returns None if input is None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def format_for_display(dt: Optional[datetime], format_str: str = "%b %d, %Y %I:%M %p") -> Optional[str]:
    """
    Format datetime for human-readable display.

    Default format: "Jan 01, 2026 02:30 PM"
    """
    if dt is None:
        return None
    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)
    return dt.strftime(format_str)


def parse_iso(iso_string: str) -> Optional[datetime]:
    """
    Parse ISO 8601 datetime string. Naive values are taken to be in the
    project time zone.

    Returns None if parsing fails.
    """
    if not iso_string:
        return None
    try:
        parsed = datetime.fromisoformat(iso_string.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def check_in_start() -> Optional[datetime]:
    """Configured check-in start, or None when check-in is not scheduled."""
    return parse_iso(getattr(settings, "CHECK_IN_START", ""))


def check_in_cutoff() -> Optional[datetime]:
    """Start plus the configured window (3 days by default)."""
    start = check_in_start()
    if start is None:
        return None
    return start + timedelta(days=getattr(settings, "CHECK_IN_WINDOW_DAYS", 3))


def is_check_in_closed(current: Optional[datetime] = None) -> bool:
    """True once the cutoff has passed."""
    cutoff = check_in_cutoff()
    if cutoff is None:
        return False
    return (current or now()) > cutoff
