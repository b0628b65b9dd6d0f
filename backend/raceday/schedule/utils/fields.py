from typing import Any, Optional


def first_present(record: dict, fields: tuple[str, ...]) -> Optional[str]:
    """Return the first non-blank field value (stringified, stripped), else None."""
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


def as_series_id(value: Any) -> Optional[int]:
    # feed sends 1, 1.0 or "1" depending on the cache generation
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(str(value).strip())
    except ValueError:
        return None
    if not num.is_integer():
        return None
    return int(num)
