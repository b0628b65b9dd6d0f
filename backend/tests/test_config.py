import pytest

from raceday.core.config import DEFAULT_FEED_URL, load_config

ENV_KEYS = [
    "RACEDAY_FEED_URL",
    "RACEDAY_VIEWER_TZ",
    "RACEDAY_RETRIES",
    "RACEDAY_CONNECT_TIMEOUT_SECONDS",
    "RACEDAY_READ_TIMEOUT_SECONDS",
    "RACEDAY_BACKOFF_BASE_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults():
    cfg = load_config()
    assert cfg.feed_url == DEFAULT_FEED_URL
    assert cfg.viewer_tz_name is None
    assert cfg.viewer_tz is None
    assert cfg.retries == 3
    assert cfg.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RACEDAY_VIEWER_TZ", "America/Denver")
    monkeypatch.setenv("RACEDAY_RETRIES", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = load_config()
    assert str(cfg.viewer_tz) == "America/Denver"
    assert cfg.retries == 5
    assert cfg.log_level == "DEBUG"


def test_unknown_viewer_zone(monkeypatch):
    monkeypatch.setenv("RACEDAY_VIEWER_TZ", "Not/AZone")
    with pytest.raises(RuntimeError):
        load_config()


def test_retries_must_be_positive(monkeypatch):
    monkeypatch.setenv("RACEDAY_RETRIES", "0")
    with pytest.raises(RuntimeError):
        load_config()
