from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query

from raceday.api.v1.schemas.next_races import NextRaceOut, NextRacesOut
from raceday.core.config import AppConfig
from raceday.core.deps import get_config, get_registry, get_source
from raceday.schedule.broadcasters import RADIO_LOGOS, SAT_LOGOS, TV_LOGOS
from raceday.schedule.feed import FeedShapeError
from raceday.schedule.registry import SeriesDescriptor
from raceday.schedule.selector import build_next_races
from raceday.schedule.sources.base import BaseSource
from raceday.schedule.sources.nascar.http import FeedError
from raceday.schedule.types import NextRace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["next-races"])


def outlet_logos(nr: NextRace) -> dict[str, str]:
    b = nr.broadcasts
    logos: dict[str, str] = {}
    for codes, table in ((b.tv, TV_LOGOS), (b.radio, RADIO_LOGOS), (b.satellite, SAT_LOGOS)):
        logos.update({c: table[c] for c in codes if c in table})
    return logos


def to_out(nr: NextRace, desc: SeriesDescriptor) -> NextRaceOut:
    ev = nr.event
    return NextRaceOut(
        code=nr.code,
        series_name=ev.series or desc.fallback_name,
        series_logo=desc.logo,
        race_name=ev.race_name or "TBA",
        venue=ev.venue or "TBA",
        start=ev.start.isoformat(),
        tv=list(nr.broadcasts.tv),
        radio=list(nr.broadcasts.radio),
        satellite=list(nr.broadcasts.satellite),
        outlet_logos=outlet_logos(nr),
    )


@router.get("/next-races", response_model=NextRacesOut)
def get_next_races(
    tz: Optional[str] = Query(None, description="IANA zone for start times, e.g. America/Chicago"),
    cfg: AppConfig = Depends(get_config),
    source: BaseSource = Depends(get_source),
    registry: Mapping[str, SeriesDescriptor] = Depends(get_registry),
):
    tz_name = tz or cfg.viewer_tz_name
    try:
        viewer_tz = ZoneInfo(tz_name) if tz_name else None
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown time zone: {tz_name}")

    try:
        payload = source.fetch()
    except (httpx.HTTPError, FeedError) as e:
        logger.error("Feed fetch failed: %r", e)
        raise HTTPException(status_code=502, detail="Failed to load schedule")

    try:
        next_races = build_next_races(payload, datetime.now(timezone.utc), registry, viewer_tz)
    except FeedShapeError as e:
        logger.error("Feed payload rejected: %s", e)
        raise HTTPException(status_code=502, detail="Schedule feed has an unexpected shape")

    races = [to_out(next_races[code], desc) for code, desc in registry.items() if code in next_races]
    return NextRacesOut(tz=tz_name, races=races)
