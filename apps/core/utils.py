"""
Utility functions for the Environmental Quality API.
"""
import math


def round_half_up(value, ndigits=0):
    """
    Round halves towards positive infinity.

    Same as JavaScript Math.round, so round_half_up(0.25, 1) == 0.3
    and round_half_up(-0.5) == 0, unlike the built-in round().
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if ndigits == 0 else rounded


def clamp(value, lower, upper):
    return max(lower, min(upper, value))


def coerce_number(value, default):
    """
    Coerce an upstream field to float, falling back to `default`.

    Absent, null, non-numeric and non-finite values all count as missing.

    Args:
        value: raw value from a provider payload
        default: value to use when `value` is missing

    Returns:
        float
    """
    if value is None or isinstance(value, bool):
        return float(default)

    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)

    if not math.isfinite(number):
        return float(default)

    return number


def classify(value, categories):
    """
    Find the category row for an index value.

    Rows are checked in order; the first whose max_value is None or
    >= value wins, so upper bounds are inclusive.

    Args:
        value: index value (unrounded)
        categories: ordered list of category dicts from constants

    Returns:
        dict: matching category row
    """
    for category in categories:
        if category['max_value'] is None or value <= category['max_value']:
            return category

    raise ValueError("Category table must end with an unbounded row")


def category_for_index(value, index='AQI'):
    """
    Look up category information for an AQI or WQI value.

    Args:
        value: index value
        index: 'AQI' or 'WQI'

    Returns:
        dict: category information
    """
    from .constants import AQI_CATEGORIES, WQI_CATEGORIES

    categories = AQI_CATEGORIES if index == 'AQI' else WQI_CATEGORIES
    return classify(value, categories)


def validate_coordinates(lat, lon):
    """
    Validate latitude and longitude values.

    Args:
        lat: latitude value
        lon: longitude value

    Returns:
        tuple: (is_valid, error_message)
    """
    try:
        lat = float(lat)
        lon = float(lon)

        if not (-90 <= lat <= 90):
            return False, "Latitude must be between -90 and 90"

        if not (-180 <= lon <= 180):
            return False, "Longitude must be between -180 and 180"

        return True, None

    except (TypeError, ValueError):
        return False, "Invalid coordinate format"
