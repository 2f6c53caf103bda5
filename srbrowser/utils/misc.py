import datetime


def get_utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def get_utc_iso_now() -> str:
    return get_utc_now().isoformat()


def ordinal(number: int) -> str:
    """Return the English ordinal for a number, e.g. 1st, 12th, 23rd."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def format_duration(seconds: float) -> str:
    """Format a run time in seconds as ``1h 02m 03s 456ms``.

    Leading zero units are dropped and milliseconds are only shown when present.
    """
    total_ms = round(seconds * 1000)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)

    parts: list[str] = []
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes:02d}m" if hours else f"{minutes}m")
    parts.append(f"{secs:02d}s" if parts else f"{secs}s")
    if millis:
        parts.append(f"{millis:03d}ms")

    return " ".join(parts)
