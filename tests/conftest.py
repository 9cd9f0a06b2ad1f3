"""Shared fixtures: stub randomness, locations, fake providers."""
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from django.core.cache import cache

from apps.indices.readings import Location
from apps.indices.wqi import WQISynthesizer


class FixedRandom:
    """uniform() always returns the midpoint of its range."""

    def uniform(self, a, b):
        return (a + b) / 2


class LowRandom:
    """uniform() always returns the lower bound."""

    def uniform(self, a, b):
        return a


class HighRandom:
    """uniform() always returns the upper bound."""

    def uniform(self, a, b):
        return b


AIR_PAYLOAD = {
    'current': {
        'pm2_5': 12.36,
        'pm10': 20.04,
        'ozone': 61.75,
        'nitrogen_dioxide': 14.2,
        'sulphur_dioxide': 2.25,
        'carbon_monoxide': 230.44,
        'us_aqi': 57,
    }
}

WEATHER_PAYLOAD = {
    'current': {
        'temperature_2m': 20,
        'relative_humidity_2m': 50,
        'precipitation': 0,
    }
}


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def location():
    return Location(lat=10.0, lng=20.0, address="Test Town")


@pytest.fixture
def synthesizer():
    return WQISynthesizer(rng=FixedRandom())


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def air_provider():
    provider = MagicMock()
    provider.fetch_air.return_value = AIR_PAYLOAD
    return provider


@pytest.fixture
def weather_provider():
    provider = MagicMock()
    provider.fetch_weather.return_value = WEATHER_PAYLOAD
    return provider
