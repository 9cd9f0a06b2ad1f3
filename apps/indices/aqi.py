"""
AQI normalizer: turns an Open-Meteo air-quality payload into an AirQualityReading.
"""
import logging
from collections.abc import Mapping

from apps.core.constants import AQI_CATEGORIES, DEFAULT_US_AQI, POLLUTANTS
from apps.core.exceptions import NoDataAvailable
from apps.core.utils import coerce_number, round_half_up

from .readings import AirQualityReading, category_fields

logger = logging.getLogger(__name__)


def normalize_air_quality(payload):
    """
    Normalize a raw air-quality response.

    Missing pollutant fields default to 0 and a missing us_aqi defaults
    to 50. No randomness is involved, so identical payloads produce
    identical readings.

    Args:
        payload: decoded JSON from the air provider

    Returns:
        AirQualityReading

    Raises:
        NoDataAvailable: if the payload has no `current` block
    """
    current = payload.get('current') if isinstance(payload, Mapping) else None
    if not isinstance(current, Mapping):
        raise NoDataAvailable("Air quality response has no current block")

    us_aqi = max(0.0, coerce_number(current.get('us_aqi'), DEFAULT_US_AQI))
    category, color_key = category_fields(us_aqi, AQI_CATEGORIES)

    pollutants = {
        field: round_half_up(max(0.0, coerce_number(current.get(meta['source_field']), 0)), 1)
        for field, meta in POLLUTANTS.items()
    }

    logger.debug(
        "Extracted pollutants pm25=%s pm10=%s o3=%s us_aqi=%s",
        pollutants['pm25'], pollutants['pm10'], pollutants['o3'], us_aqi,
    )

    return AirQualityReading(
        aqi=round_half_up(us_aqi),
        category=category,
        color_key=color_key,
        **pollutants,
    )
