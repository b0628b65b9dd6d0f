import logging
import random
import threading
import time
from typing import Any, Optional

import httpx

from raceday.core.config import AppConfig

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429, 502, 503, 504, 520, 522, 524}


class FeedError(RuntimeError):
    """The feed could not be retrieved or decoded."""


class FeedCancelled(FeedError):
    """Feed retrieval was aborted through its cancellation event."""


class FeedDecodeError(FeedError):
    """The feed answered 200 with a body that is not JSON."""


def configure_logging_if_needed(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def log_request(request: httpx.Request) -> None:
    logger.debug("HTTP %s %s", request.method, request.url)


def make_client(cfg: AppConfig, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    timeout = httpx.Timeout(cfg.read_timeout, connect=cfg.connect_timeout)
    return httpx.Client(
        timeout=timeout,
        headers={"Accept": "application/json"},
        follow_redirects=True,
        event_hooks={"request": [log_request]},
        transport=transport,
    )


def _check_cancel(cancel: Optional[threading.Event], url: str) -> None:
    if cancel is not None and cancel.is_set():
        raise FeedCancelled(f"GET {url} cancelled")


def sleep_backoff(cfg: AppConfig, *, attempt: int, url: str, cancel: Optional[threading.Event]) -> None:
    sleep_s = cfg.backoff_base * (2 ** (attempt - 1))
    sleep_s += random.uniform(0, 0.5)
    logger.info("Sleeping %.2fs before retrying %s", sleep_s, url)
    if cancel is None:
        time.sleep(sleep_s)
    elif cancel.wait(sleep_s):
        raise FeedCancelled(f"GET {url} cancelled during backoff")


def decode_json(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError as e:
        snippet = (r.text or "")[:300]
        logger.error("Feed body is not JSON GET %s body_snippet=%r", r.request.url, snippet)
        raise FeedDecodeError(f"GET {r.request.url} returned non-JSON body") from e


def get_with_retry(
    cfg: AppConfig,
    client: httpx.Client,
    url: str,
    *,
    cancel: Optional[threading.Event] = None,
) -> Any:
    """
    GET url and decode JSON. Retryable statuses, timeouts and transport errors
    are retried with backoff; other HTTP errors raise at once.
    """
    last_err: Exception | None = None

    for attempt in range(1, cfg.retries + 1):
        _check_cancel(cancel, url)
        t0 = time.perf_counter()
        try:
            r = client.get(url)
        except httpx.TransportError as e:
            last_err = e
            logger.warning(
                "%s on GET %s (attempt %d/%d, %.2fs): %s",
                e.__class__.__name__,
                url,
                attempt,
                cfg.retries,
                time.perf_counter() - t0,
                e,
            )
        else:
            logger.debug("GET %s status=%d in %.2fs", url, r.status_code, time.perf_counter() - t0)
            if r.status_code not in RETRY_STATUSES:
                if r.is_error:
                    logger.error("Non-retryable HTTP %d GET %s", r.status_code, url)
                r.raise_for_status()
                return decode_json(r)

            logger.warning(
                "Retryable HTTP %d on GET %s (attempt %d/%d) body_snippet=%r",
                r.status_code,
                url,
                attempt,
                cfg.retries,
                (r.text or "")[:300],
            )
            last_err = httpx.HTTPStatusError(f"Retryable status {r.status_code}", request=r.request, response=r)

        if attempt < cfg.retries:
            sleep_backoff(cfg, attempt=attempt, url=url, cancel=cancel)

    raise last_err  # type: ignore
