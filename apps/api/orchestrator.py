"""
Refresh orchestrator: sequences the air and weather lookups for each selected location.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Union

from django.conf import settings

from apps.adapters.open_meteo import OpenMeteoAirAdapter, OpenMeteoWeatherAdapter
from apps.core.constants import NO_DATA_MESSAGE, PROVIDER_ERROR_MESSAGE
from apps.core.exceptions import NoDataAvailable, ProviderUnreachable
from apps.indices.aqi import normalize_air_quality
from apps.indices.readings import AirQualityReading, DisplayMode, Location, WaterQualityReading
from apps.indices.wqi import WQISynthesizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    status = 'idle'


@dataclass(frozen=True)
class Loading:
    location: Location
    status = 'loading'


@dataclass(frozen=True)
class Ready:
    location: Location
    status = 'ready'


@dataclass(frozen=True)
class Error:
    location: Location
    message: str
    status = 'error'


RefreshState = Union[Idle, Loading, Ready, Error]


@dataclass(frozen=True)
class Snapshot:
    """Consistent view of the orchestrator's fields at one instant."""
    state: RefreshState
    location: Optional[Location]
    air_reading: Optional[AirQualityReading]
    water_reading: Optional[WaterQualityReading]
    last_error: Optional[str]


class RefreshOrchestrator:
    """
    Owns the current location and its reading pair.

    Each select_location() call:
    1. Enters Loading and clears the previous location, readings and error
    2. Fetches air quality; failure ends the cycle in Error
    3. Commits the AQI reading and enters Ready
    4. Synthesizes the WQI reading (falls back, never errors) and commits it

    Requests are tagged with a generation number. A completion only
    commits while its generation is still the latest, so a slow response
    for an earlier location can never overwrite a newer one.
    """

    def __init__(
        self,
        air_provider=None,
        weather_provider=None,
        synthesizer: Optional[WQISynthesizer] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.settings = settings.ENVIRONMENT_QUALITY_SETTINGS
        self.air_provider = air_provider or OpenMeteoAirAdapter()
        self.weather_provider = weather_provider or OpenMeteoWeatherAdapter()
        self.synthesizer = synthesizer or WQISynthesizer()

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.get('REFRESH_WORKERS', 2),
            thread_name_prefix='refresh',
        )

        self._lock = threading.Lock()
        self._generation = 0
        self._state: RefreshState = Idle()
        self._location = None
        self._air_reading = None
        self._water_reading = None
        self._last_error = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def select_location(self, location: Location):
        """
        Start a refresh for a new location.

        Args:
            location: the newly selected Location

        Returns:
            Future resolving to the state this request committed, or None
            if a newer request superseded it
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._state = Loading(location)
            self._location = None
            self._air_reading = None
            self._water_reading = None
            self._last_error = None

        logger.info(f"Refreshing indices for {location.address} ({location.lat}, {location.lng})")
        return self._executor.submit(self._run_refresh, generation, location)

    def refresh(self, location: Location, timeout=None):
        """Run a refresh and wait for the whole cycle, including WQI."""
        if timeout is None:
            timeout = self.settings.get('REFRESH_TIMEOUT', 30)
        return self.select_location(location).result(timeout=timeout)

    def _run_refresh(self, generation, location):
        try:
            payload = self.air_provider.fetch_air(location.lat, location.lng)
            air_reading = normalize_air_quality(payload)
        except NoDataAvailable as e:
            logger.error(f"No air quality data for ({location.lat}, {location.lng}): {e}")
            return self._commit_error(generation, location, NO_DATA_MESSAGE)
        except ProviderUnreachable as e:
            logger.error(f"Air quality fetch failed for ({location.lat}, {location.lng}): {e}")
            return self._commit_error(generation, location, PROVIDER_ERROR_MESSAGE)
        except Exception:
            logger.exception(f"Unexpected error fetching air quality for ({location.lat}, {location.lng})")
            return self._commit_error(generation, location, PROVIDER_ERROR_MESSAGE)

        with self._lock:
            if generation != self._generation:
                logger.info(f"Discarding stale air reading for {location.address}")
                return None
            self._air_reading = air_reading
            self._location = location
            self._state = Ready(location)
            state = self._state

        water_reading = self.synthesizer.compute(self.weather_provider.fetch_weather, location)

        with self._lock:
            if generation != self._generation:
                logger.info(f"Discarding stale water reading for {location.address}")
                return None
            self._water_reading = water_reading

        return state

    def _commit_error(self, generation, location, message):
        with self._lock:
            if generation != self._generation:
                logger.info(f"Discarding stale error for {location.address}")
                return None
            self._state = Error(location, message)
            self._last_error = message
            return self._state

    def snapshot(self) -> Snapshot:
        """
        Read every field under the lock.

        The single-field getters below can interleave with a running
        refresh, e.g. see Ready while the WQI reading is still None.
        """
        with self._lock:
            return Snapshot(
                state=self._state,
                location=self._location,
                air_reading=self._air_reading,
                water_reading=self._water_reading,
                last_error=self._last_error,
            )

    def get_current_air_reading(self):
        return self._air_reading

    def get_current_water_reading(self):
        return self._water_reading

    def get_current_location(self):
        return self._location

    def get_refresh_state(self) -> RefreshState:
        return self._state

    def get_last_error(self):
        return self._last_error

    def get_displayed_reading(self, mode=DisplayMode.AQI):
        """Reading selected by the display mode, or None if it is absent."""
        if DisplayMode(mode) is DisplayMode.AQI:
            return self._air_reading
        return self._water_reading
