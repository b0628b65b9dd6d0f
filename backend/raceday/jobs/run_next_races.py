import argparse
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from raceday.core.config import load_config
from raceday.schedule.registry import SERIES
from raceday.schedule.selector import build_next_races
from raceday.schedule.sources.nascar.http import configure_logging_if_needed
from raceday.schedule.sources.nascar.source import NascarSource


def format_race(code: str, nr) -> str:
    desc = SERIES[code]
    ev = nr.event
    b = nr.broadcasts
    return "\n".join(
        [
            f"[{code}] {ev.series or desc.fallback_name}",
            f"  {ev.race_name or 'TBA'} @ {ev.venue or 'TBA'}",
            f"  {ev.start.strftime('%a %b %d %Y %I:%M %p %Z')}",
            f"  TV: {', '.join(b.tv) or '-'}  Radio: {', '.join(b.radio) or '-'}  Satellite: {', '.join(b.satellite) or '-'}",
        ]
    )


def main():
    p = argparse.ArgumentParser(description="Print the next race and its broadcasters for each tracked series")
    p.add_argument("--tz", help="IANA zone for start times (default: RACEDAY_VIEWER_TZ or system local)")
    p.add_argument("--now", help="ISO datetime to treat as now (default: current time)")
    args = p.parse_args()

    cfg = load_config()
    configure_logging_if_needed(cfg.log_level)

    viewer_tz = ZoneInfo(args.tz) if args.tz else cfg.viewer_tz
    now = datetime.fromisoformat(args.now) if args.now else datetime.now(timezone.utc)

    payload = NascarSource(cfg).fetch()

    next_races = build_next_races(payload, now, SERIES, viewer_tz)
    for code in SERIES:
        if code in next_races:
            print(format_race(code, next_races[code]))
        else:
            print(f"[{code}] {SERIES[code].fallback_name}\n  No upcoming race found.")


if __name__ == "__main__":
    main()
