import logging
import re
from typing import Iterable, Optional

from raceday.schedule.types import BroadcastSet
from raceday.schedule.utils.fields import first_present

logger = logging.getLogger(__name__)

SPLIT_RE = re.compile(r"[,&/]|\band\b", re.IGNORECASE)

Rule = tuple[re.Pattern, str]


def _rules(*pairs: tuple[str, str]) -> tuple[Rule, ...]:
    return tuple((re.compile(p), code) for p, code in pairs)


# Evaluated top to bottom against the uppercased token; first hit wins.
TV_RULES = _rules(
    (r"FOX\s*SPORTS\s*1|FS1", "FS1"),
    (r"FOX", "FOX"),
    (r"NBC", "NBC"),
    (r"\bUSA\b", "USA"),
    (r"\bCW\b|THE\s*CW", "CW"),
    (r"PRIME|AMAZON", "PRIME"),
)

RADIO_RULES = _rules(
    (r"NRN", "MRN"),  # old MRN branding still shows up in the feed
    (r"MRN", "MRN"),
    (r"PRN", "PRN"),
)

SAT_RULES = _rules(
    (r"SIRIUS\s*XM|^SXM$", "SIRIUSXM"),
)

TV_FIELDS = ("television_broadcaster",)
TV_LEGACY_FIELDS = ("network", "tv_broadcaster")
RADIO_FIELDS = ("radio_broadcaster",)
RADIO_LEGACY_FIELDS = ("radio",)
SAT_FIELDS = ("satellite_radio_broadcaster",)

TV_LOGOS = {
    "FOX": "https://upload.wikimedia.org/wikipedia/commons/thumb/e/ee/Fox_Sports_wordmark_logo.svg/250px-Fox_Sports_wordmark_logo.svg.png",
    "FS1": "https://upload.wikimedia.org/wikipedia/commons/thumb/3/37/2015_Fox_Sports_1_logo.svg/220px-2015_Fox_Sports_1_logo.svg.png",
    "NBC": "https://upload.wikimedia.org/wikipedia/commons/thumb/7/7a/NBC_logo_2022_%28vertical%29.svg/250px-NBC_logo_2022_%28vertical%29.svg.png",
    "USA": "https://upload.wikimedia.org/wikipedia/commons/thumb/8/84/USA_Network_2020.svg/250px-USA_Network_2020.svg.png",
    "CW": "https://upload.wikimedia.org/wikipedia/commons/thumb/b/b1/The_CW_2024.svg/250px-The_CW_2024.svg.png",
    "PRIME": "https://upload.wikimedia.org/wikipedia/commons/thumb/9/9e/Amazon_Prime_logo_%282024%29.svg/250px-Amazon_Prime_logo_%282024%29.svg.png",
}

RADIO_LOGOS = {
    "MRN": "https://upload.wikimedia.org/wikipedia/commons/thumb/0/05/Motor_Racing_Network_logo.svg/250px-Motor_Racing_Network_logo.svg.png",
    "PRN": "https://upload.wikimedia.org/wikipedia/en/thumb/7/7b/Performance_Racing_Network.png/250px-Performance_Racing_Network.png",
}

SAT_LOGOS = {
    "SIRIUSXM": "https://upload.wikimedia.org/wikipedia/commons/thumb/e/ef/Sirius_XM_logo_2023.svg/250px-Sirius_XM_logo_2023.svg.png",
}


def split_names(value: Optional[str]) -> list[str]:
    """Split "FOX, FS1 & NBC" / "FOX/FS1 and NBC" into trimmed, non-empty names."""
    if not value:
        return []
    return [s.strip() for s in SPLIT_RE.split(value) if s.strip()]


def normalize_name(name: str, rules: tuple[Rule, ...]) -> str:
    up = name.strip().upper()
    for pattern, code in rules:
        if pattern.search(up):
            return code
    logger.debug("No canonical outlet for %r, passing through", up)
    return up


def unique(codes: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(codes))


def _codes(record: dict, fields: tuple[str, ...], rules: tuple[Rule, ...]) -> tuple[str, ...]:
    return unique(normalize_name(n, rules) for n in split_names(first_present(record, fields)))


def resolve_broadcasters(record: dict) -> BroadcastSet:
    tv = _codes(record, TV_FIELDS, TV_RULES)
    if not tv:
        tv = _codes(record, TV_LEGACY_FIELDS, TV_RULES)

    radio = _codes(record, RADIO_FIELDS, RADIO_RULES)
    if not radio:
        radio = _codes(record, RADIO_LEGACY_FIELDS, RADIO_RULES)

    satellite = _codes(record, SAT_FIELDS, SAT_RULES)

    return BroadcastSet(tv=tv, radio=radio, satellite=satellite)
