from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BroadcastSet:
    tv: tuple[str, ...] = ()
    radio: tuple[str, ...] = ()
    satellite: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedEvent:
    series_id: Optional[int]
    series: Optional[str]            # feed-provided series name
    race_name: Optional[str]
    venue: Optional[str]             # track_name, else venue

    start: datetime                  # tz-aware, viewer zone

    record: dict = field(repr=False, compare=False)


@dataclass(frozen=True)
class NextRace:
    code: str                        # registry code, e.g. "N1"
    event: ResolvedEvent
    broadcasts: BroadcastSet
