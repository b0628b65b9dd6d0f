import logging
import re
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from raceday.schedule.utils.fields import first_present

logger = logging.getLogger(__name__)

EASTERN = ZoneInfo("America/New_York")

# Precedence chains, first non-empty field wins.
ISO_FIELDS = ("start_time_local", "start_time_utc", "date_scheduled", "race_date")
DATE_FIELDS = ("date", "race_date")
CLOCK_FIELDS = ("time_local", "time", "race_time")

CLOCK_FORMATS = ("%Y-%m-%d %I:%M %p", "%Y-%m-%d %I %p")

# "3:30 PM ET" -> "3:30 PM"; the meridiem itself is never treated as a zone.
TRAILING_ZONE_RE = re.compile(r"\s+(?!(?:AM|PM)$)[A-Z]{2,4}$", re.IGNORECASE)


def to_viewer(dt: datetime, viewer_tz: Optional[tzinfo]) -> Optional[datetime]:
    """
    Attach the viewer zone to naive values, then convert.
    viewer_tz=None means the process's local zone.
    Returns None when the shifted value falls outside datetime's range.
    """
    try:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=viewer_tz) if viewer_tz is not None else dt.astimezone()
        return dt.astimezone(viewer_tz)
    except (OverflowError, OSError):
        logger.debug("Start %s out of range for viewer zone", dt.isoformat())
        return None


def strip_zone_abbrev(clock: str) -> str:
    return TRAILING_ZONE_RE.sub("", clock.strip()).strip()


def parse_iso(value: str, viewer_tz: Optional[tzinfo]) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    return to_viewer(dt, viewer_tz)


def parse_date_and_clock(
    date_str: str,
    clock_str: str,
    zone_name: Optional[str],
    viewer_tz: Optional[tzinfo],
) -> Optional[datetime]:
    zone = EASTERN
    if zone_name:
        try:
            zone = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("Unknown time_zone %r", zone_name)
            return None

    combined = f"{date_str} {strip_zone_abbrev(clock_str)}"
    for fmt in CLOCK_FORMATS:
        try:
            naive = datetime.strptime(combined, fmt)
        except ValueError:
            continue
        return to_viewer(naive.replace(tzinfo=zone), viewer_tz)
    return None


def resolve_start(record: dict, viewer_tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Resolve a race start from whichever timing fields the record carries.

    1) a combined ISO-8601 value (start_time_local / start_time_utc /
       date_scheduled / race_date)
    2) a calendar date plus a 12-hour clock, read in the record's time_zone
       or US Eastern
    Returns None when neither yields a datetime.
    """
    iso = first_present(record, ISO_FIELDS)
    if iso:
        dt = parse_iso(iso, viewer_tz)
        if dt is not None:
            return dt

    date_str = first_present(record, DATE_FIELDS)
    clock_str = first_present(record, CLOCK_FIELDS)
    if date_str and clock_str:
        return parse_date_and_clock(
            date_str,
            clock_str,
            first_present(record, ("time_zone",)),
            viewer_tz,
        )
    return None
