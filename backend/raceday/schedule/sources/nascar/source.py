import logging
import threading
from typing import Any, Optional

import httpx

from raceday.core.config import AppConfig, load_config
from raceday.schedule.sources.base import BaseSource

from .http import configure_logging_if_needed, get_with_retry, make_client

logger = logging.getLogger(__name__)


class NascarSource(BaseSource):
    """
    NASCAR race list cache (race_list_basic.json): one GET, decoded JSON returned as-is.
    """

    def __init__(self, cfg: Optional[AppConfig] = None, transport: Optional[httpx.BaseTransport] = None):
        self.cfg = cfg or load_config()
        configure_logging_if_needed(self.cfg.log_level)
        self.transport = transport

        logger.info(
            "Feed configured url=%s timeouts(connect=%.1f read=%.1f) retries=%d backoff_base=%.2f",
            self.cfg.feed_url,
            self.cfg.connect_timeout,
            self.cfg.read_timeout,
            self.cfg.retries,
            self.cfg.backoff_base,
        )

    def fetch(self, cancel: Optional[threading.Event] = None) -> Any:
        with make_client(self.cfg, transport=self.transport) as client:
            payload = get_with_retry(self.cfg, client, self.cfg.feed_url, cancel=cancel)
        logger.info("Feed fetched url=%s type=%s", self.cfg.feed_url, type(payload).__name__)
        return payload
