"""
WQI synthesizer: approximates a water quality index from weather proxies.

There is no water sensor behind this. The index is a deterministic score
built from temperature, humidity, precipitation and a coarse positional
bias; the secondary water parameters add bounded uniform jitter around a
temperature-linked baseline.
"""
import logging
import random
from collections.abc import Mapping

from apps.core.constants import FALLBACK_WATER_READING, WEATHER_DEFAULTS, WQI_CATEGORIES
from apps.core.exceptions import NoDataAvailable
from apps.core.utils import clamp, coerce_number, round_half_up

from .readings import WaterQualityReading, category_fields

logger = logging.getLogger(__name__)

OPTIMAL_TEMPERATURE = 22.5


def temperature_factor(temperature):
    deviation = abs(temperature - OPTIMAL_TEMPERATURE)
    return 20 if deviation > 15 else deviation * 1.5


def humidity_factor(humidity):
    if humidity > 80:
        return 15
    if humidity < 30:
        return 10
    return 0


def precipitation_factor(precipitation):
    if precipitation > 5:
        return 25
    if precipitation > 2:
        return 15
    return 0


def latitude_variation(lat):
    if abs(lat) > 45:
        return -15
    return 5 if lat > 0 else -5


def longitude_variation(lng):
    return -10 if abs(lng) > 100 else 0


def compute_wqi(temperature, humidity, precipitation, lat, lng):
    """Deterministic WQI in [0, 100]."""
    base = (
        50
        + temperature_factor(temperature)
        + humidity_factor(humidity)
        + precipitation_factor(precipitation)
    )
    wqi = clamp(base + latitude_variation(lat) + longitude_variation(lng), 0, 100)
    return round_half_up(wqi)


class WQISynthesizer:
    """
    Builds WaterQualityReadings from weather data.

    `rng` is any object with a random.Random-style `uniform(a, b)`; pass a
    seeded random.Random or a stub to pin the jittered parameters.
    """

    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def synthesize(self, weather_payload, location):
        """
        Synthesize a reading from a forecast response.

        Args:
            weather_payload: decoded JSON from the weather provider
            location: Location the weather was fetched for

        Returns:
            WaterQualityReading

        Raises:
            NoDataAvailable: if the payload is not a JSON object
        """
        if not isinstance(weather_payload, Mapping):
            raise NoDataAvailable("Weather response is not an object")

        current = weather_payload.get('current')
        if not isinstance(current, Mapping):
            current = {}

        temperature = coerce_number(
            current.get('temperature_2m'), WEATHER_DEFAULTS['temperature_2m']
        )
        humidity = coerce_number(
            current.get('relative_humidity_2m'), WEATHER_DEFAULTS['relative_humidity_2m']
        )
        precipitation = coerce_number(
            current.get('precipitation'), WEATHER_DEFAULTS['precipitation']
        )

        wqi = compute_wqi(temperature, humidity, precipitation, location.lat, location.lng)
        category, color_key = category_fields(wqi, WQI_CATEGORIES)

        logger.debug(
            "WQI for (%s, %s): %s (temp=%s humidity=%s precip=%s)",
            location.lat, location.lng, wqi, temperature, humidity, precipitation,
        )

        uniform = self.rng.uniform
        ph = 6.5 + (temperature - 20) * 0.1 + uniform(-0.25, 0.25)
        # Floored at 2 first, then at 0 with the other parameters.
        dissolved_oxygen = max(2, 10 - (temperature - 20) * 0.2 + uniform(-0.5, 0.5))
        turbidity = 2 + abs(location.lat) * 0.05 + uniform(-1, 1)
        conductivity = 400 + abs(location.lng) * 2 + uniform(-100, 100)

        return WaterQualityReading(
            wqi=wqi,
            ph=clamp(ph, 5, 9),
            dissolved_oxygen=max(0, dissolved_oxygen),
            turbidity=max(0, turbidity),
            temperature=temperature,
            conductivity=max(0, conductivity),
            category=category,
            color_key=color_key,
        )

    @staticmethod
    def fallback_reading():
        return WaterQualityReading(is_fallback=True, **FALLBACK_WATER_READING)

    def compute(self, fetch_weather, location):
        """
        Fetch weather for a location and synthesize a reading.

        Any failure, from the provider or from the payload, produces the
        fallback reading instead of an error.
        """
        try:
            payload = fetch_weather(location.lat, location.lng)
            return self.synthesize(payload, location)
        except Exception as e:
            logger.warning(
                f"Weather lookup failed for ({location.lat}, {location.lng}), "
                f"using fallback WQI: {e}"
            )
            return self.fallback_reading()
