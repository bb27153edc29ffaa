from datetime import UTC, datetime, timedelta, timezone

# Fixed UTC-6, no daylight saving.
LOCAL_TZ = timezone(timedelta(hours=-6), "CST")


def to_local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(LOCAL_TZ)


def format_clock(dt: datetime) -> str:
    """Render a 12-hour clock with seconds, e.g. ``2:05:09PM``."""
    local = to_local(dt)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d}:{local.second:02d}{suffix}"


def day_key(dt: datetime) -> str:
    local = to_local(dt)
    return f"{local.year}-{local.month}-{local.day}"


def local_hour(dt: datetime) -> int:
    return to_local(dt).hour


def epoch_millis(dt: datetime) -> int:
    return int(to_local(dt).timestamp() * 1000)
