import pytest

from raceday.core.config import AppConfig


@pytest.fixture
def cfg():
    return AppConfig(
        feed_url="https://feed.test/race_list_basic.json",
        viewer_tz_name="UTC",
        connect_timeout=1.0,
        read_timeout=1.0,
        retries=3,
        backoff_base=0.0,
        log_level="INFO",
    )
