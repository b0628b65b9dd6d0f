import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_FEED_URL = "https://cf.nascar.com/cacher/2025/race_list_basic.json"


@dataclass(frozen=True)
class AppConfig:
    feed_url: str
    viewer_tz_name: Optional[str]     # None -> process local zone

    connect_timeout: float
    read_timeout: float

    retries: int
    backoff_base: float

    log_level: str

    @property
    def viewer_tz(self) -> Optional[tzinfo]:
        return ZoneInfo(self.viewer_tz_name) if self.viewer_tz_name else None


def load_config() -> AppConfig:
    load_dotenv()

    viewer_tz_name = os.getenv("RACEDAY_VIEWER_TZ") or None
    if viewer_tz_name:
        try:
            ZoneInfo(viewer_tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise RuntimeError(f"RACEDAY_VIEWER_TZ is not a known IANA zone: {viewer_tz_name!r}")

    retries = int(os.getenv("RACEDAY_RETRIES", "3"))
    if retries < 1:
        raise RuntimeError("RACEDAY_RETRIES must be >= 1")

    return AppConfig(
        feed_url=os.getenv("RACEDAY_FEED_URL", DEFAULT_FEED_URL),
        viewer_tz_name=viewer_tz_name,
        connect_timeout=float(os.getenv("RACEDAY_CONNECT_TIMEOUT_SECONDS", "10")),
        read_timeout=float(os.getenv("RACEDAY_READ_TIMEOUT_SECONDS", "30")),
        retries=retries,
        backoff_base=float(os.getenv("RACEDAY_BACKOFF_BASE_SECONDS", "1.0")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
