"""
Value types passed between the location resolver, the index engine and the API.
"""
from dataclasses import asdict, dataclass
from enum import Enum

from apps.core.constants import AQI_CATEGORIES, WQI_CATEGORIES
from apps.core.utils import classify, validate_coordinates


class DisplayMode(str, Enum):
    """Which reading the presentation layer shows."""
    AQI = 'aqi'
    WQI = 'wqi'


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float
    address: str

    def __post_init__(self):
        is_valid, error = validate_coordinates(self.lat, self.lng)
        if not is_valid:
            raise ValueError(error)
        object.__setattr__(self, 'lat', float(self.lat))
        object.__setattr__(self, 'lng', float(self.lng))

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class AirQualityReading:
    """
    Normalized air quality for one location.

    Pollutant concentrations are rounded to one decimal; category and
    color_key are derived from the unrounded US AQI.
    """
    aqi: int
    pm25: float
    pm10: float
    o3: float
    no2: float
    so2: float
    co: float
    category: str
    color_key: str

    @property
    def advisory(self):
        return _advisory(self.category, AQI_CATEGORIES)

    def to_dict(self):
        data = asdict(self)
        data['advisory'] = self.advisory
        return data


@dataclass(frozen=True)
class WaterQualityReading:
    """
    Synthetic water quality for one location.

    Either synthesized from weather proxies or the fixed fallback used
    when the weather lookup fails (is_fallback=True).
    """
    wqi: int
    ph: float
    dissolved_oxygen: float
    turbidity: float
    temperature: float
    conductivity: float
    category: str
    color_key: str
    is_fallback: bool = False

    @property
    def advisory(self):
        return _advisory(self.category, WQI_CATEGORIES)

    def to_dict(self):
        data = asdict(self)
        data['advisory'] = self.advisory
        return data


def _advisory(category_name, categories):
    for row in categories:
        if row['category'] == category_name:
            return row['health_message']
    return ''


def category_fields(value, categories):
    """Return (category, color_key) for an index value."""
    row = classify(value, categories)
    return row['category'], row['color_key']
