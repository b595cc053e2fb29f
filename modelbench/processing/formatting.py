"""Human-readable formatting for sizes and timestamps."""

from datetime import datetime, timezone
from typing import Optional

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(num_bytes: int) -> str:
    """Format a byte count with 1024-based units, e.g. ``10 MB`` or ``1.5 KB``."""
    if num_bytes <= 0:
        return "0 Bytes"
    i = 0
    while i < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (i + 1):
        i += 1
    value = round(num_bytes / 1024 ** i, 2)
    return f"{value:g} {_SIZE_UNITS[i]}"


def format_upload_age(uploaded_at: datetime, now: Optional[datetime] = None) -> str:
    """Describe how long ago something happened, e.g. ``5 minutes ago``."""
    now = now or datetime.now(timezone.utc)
    seconds = max(0.0, (now - uploaded_at).total_seconds())

    if seconds < 30:
        return "less than a minute ago"
    minutes = round(seconds / 60)
    if minutes < 45:
        return _plural(max(minutes, 1), "minute")
    hours = round(seconds / 3600)
    if hours < 24:
        return _plural(max(hours, 1), "hour")
    days = round(seconds / 86400)
    if days < 30:
        return _plural(days, "day")
    months = round(days / 30)
    if months < 12:
        return _plural(months, "month")
    return _plural(round(days / 365), "year")


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def _plural(n: int, unit: str) -> str:
    suffix = "" if n == 1 else "s"
    prefix = "about " if unit in ("hour", "month", "year") else ""
    return f"{prefix}{n} {unit}{suffix} ago"
