import logging
from datetime import datetime, tzinfo
from typing import Any, Mapping, Optional

from raceday.schedule.broadcasters import resolve_broadcasters
from raceday.schedule.feed import normalize_feed
from raceday.schedule.registry import SeriesDescriptor
from raceday.schedule.types import NextRace, ResolvedEvent
from raceday.schedule.utils.fields import as_series_id, first_present
from raceday.schedule.utils.time import resolve_start

logger = logging.getLogger(__name__)


def to_resolved_event(record: dict, viewer_tz: Optional[tzinfo] = None) -> Optional[ResolvedEvent]:
    start = resolve_start(record, viewer_tz)
    if start is None:
        return None
    return ResolvedEvent(
        series_id=as_series_id(record.get("series_id")),
        series=first_present(record, ("series",)),
        race_name=first_present(record, ("race_name",)),
        venue=first_present(record, ("track_name", "venue")),
        start=start,
        record=record,
    )


def select_next_events(
    records: list[dict],
    now: datetime,
    registry: Mapping[str, SeriesDescriptor],
    viewer_tz: Optional[tzinfo] = None,
) -> dict[str, ResolvedEvent]:
    """
    Earliest event strictly after `now` per registry code.
    Codes with no qualifying event are left out of the result.
    """
    if now.tzinfo is None:
        now = now.astimezone()

    upcoming: list[ResolvedEvent] = []
    unresolved = 0
    for r in records:
        ev = to_resolved_event(r, viewer_tz)
        if ev is None:
            unresolved += 1
            logger.debug("No start time for race_name=%r series_id=%r", r.get("race_name"), r.get("series_id"))
            continue
        if ev.start > now:
            upcoming.append(ev)

    out: dict[str, ResolvedEvent] = {}
    for code, desc in registry.items():
        candidates = [ev for ev in upcoming if ev.series_id == desc.series_id]
        if candidates:
            # min() keeps the first of equal starts, i.e. feed order
            out[code] = min(candidates, key=lambda ev: ev.start)

    logger.info(
        "Selected next races records=%d unresolved=%d upcoming=%d series=%s",
        len(records),
        unresolved,
        len(upcoming),
        sorted(out),
    )
    return out


def build_next_races(
    payload: Any,
    now: datetime,
    registry: Mapping[str, SeriesDescriptor],
    viewer_tz: Optional[tzinfo] = None,
) -> dict[str, NextRace]:
    records = normalize_feed(payload)
    selected = select_next_events(records, now, registry, viewer_tz)
    return {
        code: NextRace(code=code, event=ev, broadcasts=resolve_broadcasters(ev.record))
        for code, ev in selected.items()
    }
