from datetime import datetime, timezone


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """UTC timestamp in the ``2024-01-31T12:00:00.000Z`` form stored on records."""
    return now_utc().isoformat(timespec="milliseconds").replace("+00:00", "Z")
