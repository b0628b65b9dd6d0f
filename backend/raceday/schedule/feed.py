import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

SERIES_KEY_RE = re.compile(r"^series_(\d+)$")


class FeedShapeError(ValueError):
    """The payload is none of the shapes the schedule feed is known to emit."""


def _records(items: list, *, source: str) -> list[dict]:
    out: list[dict] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            logger.debug("Skipping non-object record %s[%d]: %r", source, idx, item)
            continue
        out.append(item)
    return out


def normalize_feed(payload: Any) -> list[dict]:
    """
    Flatten the feed into one list of records. Accepted shapes:
      [ {...}, ... ]
      {"races": [ {...}, ... ]}
      {"series_1": [...], "series_2": [...], "series_3": [...]}
    In the last shape each record is copied with series_id taken from its key.
    """
    if isinstance(payload, list):
        return _records(payload, source="feed")

    if not isinstance(payload, dict):
        raise FeedShapeError(f"Unsupported feed payload type: {type(payload).__name__}")

    races = payload.get("races")
    if isinstance(races, list):
        return _records(races, source="races")

    series_keys = [(k, int(m.group(1))) for k in payload if (m := SERIES_KEY_RE.match(str(k)))]
    if not series_keys:
        raise FeedShapeError(f"Feed object has no 'races' or 'series_N' lists (keys={sorted(map(str, payload))[:10]})")

    out: list[dict] = []
    for key, series_id in sorted(series_keys, key=lambda kv: kv[1]):
        items = payload.get(key) or []
        if not isinstance(items, list):
            raise FeedShapeError(f"Feed key {key!r} is not a list")
        out.extend({**r, "series_id": series_id} for r in _records(items, source=key))

    logger.debug("Flattened %d series lists into %d records", len(series_keys), len(out))
    return out
