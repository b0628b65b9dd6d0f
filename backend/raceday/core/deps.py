from functools import lru_cache
from typing import Mapping

from raceday.core.config import AppConfig, load_config
from raceday.schedule.registry import SERIES, SeriesDescriptor
from raceday.schedule.sources.base import BaseSource
from raceday.schedule.sources.nascar.source import NascarSource


@lru_cache
def get_config() -> AppConfig:
    return load_config()


@lru_cache
def get_source() -> BaseSource:
    return NascarSource(get_config())


def get_registry() -> Mapping[str, SeriesDescriptor]:
    return SERIES
