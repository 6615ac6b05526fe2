from typing import Any, Optional


def coerce_id(value: Any) -> Optional[int]:
    """Canonical integer form of a record id, or None when it cannot be one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def same_id(a: Any, b: Any) -> bool:
    # Ids may have round-tripped through JSON as strings; "5" and 5 are the same id.
    if a is None or b is None:
        return False
    return str(a) == str(b)
