"""Date utilities for wealthwise.

Pure functions for date range calculations and formatting.
"""

from datetime import datetime, timedelta

from wealthwise.domain.models import WindowKind

_ONE_MICROSECOND = timedelta(microseconds=1)


def start_of_day(dt: datetime) -> datetime:
    """Return midnight of the calendar day containing dt."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    """Return the last representable instant of the calendar day containing dt."""
    return start_of_day(dt) + timedelta(days=1) - _ONE_MICROSECOND


def window_range(kind: WindowKind, reference: datetime) -> tuple[datetime, datetime]:
    """Calculate the inclusive bounds of a time window.

    Args:
        kind: Window kind (daily, weekly, monthly, yearly).
        reference: Any instant inside the wanted window.

    Returns:
        Tuple of (start, end) where:
        - start: First instant of the window
        - end: Last instant of the window (one microsecond before the next window)

    Raises:
        ValueError: If kind is not a known window kind.
    """
    kind = WindowKind(kind)
    day = start_of_day(reference)

    if kind is WindowKind.DAILY:
        start = day
        next_start = day + timedelta(days=1)
    elif kind is WindowKind.WEEKLY:
        # Weeks begin on Monday
        start = day - timedelta(days=day.weekday())
        next_start = start + timedelta(days=7)
    elif kind is WindowKind.MONTHLY:
        start = day.replace(day=1)
        next_start = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    else:
        start = day.replace(month=1, day=1)
        next_start = start.replace(year=start.year + 1)

    return start, next_start - _ONE_MICROSECOND


def format_window_label(kind: WindowKind, reference: datetime) -> str:
    """Format a human-readable label for a window.

    Args:
        kind: Window kind.
        reference: Any instant inside the window.

    Returns:
        Label such as "15 March 2024", "Week of 11 March 2024", "March 2024" or "2024".
    """
    kind = WindowKind(kind)
    start, _ = window_range(kind, reference)

    if kind is WindowKind.DAILY:
        return start.strftime("%d %B %Y")
    if kind is WindowKind.WEEKLY:
        return f"Week of {start.strftime('%d %B %Y')}"
    if kind is WindowKind.MONTHLY:
        return start.strftime("%B %Y")
    return start.strftime("%Y")
