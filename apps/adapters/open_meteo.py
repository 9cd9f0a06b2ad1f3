"""
Open-Meteo adapters for current air quality and weather.
Neither endpoint requires an API key.
"""
import logging
from typing import Dict

from apps.core.constants import POLLUTANTS, WEATHER_DEFAULTS

from .base import BaseAdapter

logger = logging.getLogger(__name__)


class OpenMeteoAirAdapter(BaseAdapter):
    """
    Adapter for the Open-Meteo Air Quality API.
    Returns pollutant concentrations plus the US AQI.
    """

    SOURCE_NAME = "Open-Meteo Air Quality"
    URL_SETTING = "AIR_QUALITY_URL"
    CURRENT_FIELDS = tuple(
        meta['source_field'] for meta in POLLUTANTS.values()
    ) + ('us_aqi',)

    def fetch_current(self, lat: float, lng: float) -> Dict:
        data = self._make_request(self.build_params(lat, lng))
        logger.info(f"Fetched air quality for ({lat}, {lng})")
        return data

    # Measurement Provider (air) entry point used by the orchestrator
    fetch_air = fetch_current


class OpenMeteoWeatherAdapter(BaseAdapter):
    """
    Adapter for the Open-Meteo Forecast API.
    Only the current temperature, humidity and precipitation are requested.
    """

    SOURCE_NAME = "Open-Meteo Forecast"
    URL_SETTING = "WEATHER_URL"
    CURRENT_FIELDS = tuple(WEATHER_DEFAULTS)

    def fetch_current(self, lat: float, lng: float) -> Dict:
        data = self._make_request(self.build_params(lat, lng))
        logger.info(f"Fetched weather for ({lat}, {lng})")
        return data

    fetch_weather = fetch_current
