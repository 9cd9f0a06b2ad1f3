"""
Location resolution services: forward search, reverse geocoding and device position.
"""
import logging

from django.conf import settings
from django.core.cache import cache
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from apps.core.exceptions import LocationNotFound, PermissionDenied
from apps.indices.readings import Location

logger = logging.getLogger(__name__)


def coordinate_label(lat, lng):
    """Address used when no place name is available."""
    return f"{lat:.4f}, {lng:.4f}"


class LocationService:
    """
    Resolves free text or coordinates into Locations.
    Uses the Django cache to minimize external geocoding calls.
    """

    def __init__(self, geocoder=None):
        engine_settings = getattr(settings, 'ENVIRONMENT_QUALITY_SETTINGS', {})
        self.geocoder = geocoder or Nominatim(
            user_agent=engine_settings.get('GEOCODER_USER_AGENT', 'environmental-quality-api/1.0')
        )
        self.timeout = engine_settings.get('GEOCODER_TIMEOUT', 5)
        self.cache_ttl_seconds = engine_settings.get('LOCATION_CACHE_TTL', 86400)

    def resolve(self, query):
        """
        Resolve a free-text query to the first matching place.

        Args:
            query: place name or address

        Returns:
            Location

        Raises:
            LocationNotFound: if the query is blank, nothing matches or
                the geocoder fails
        """
        query = (query or '').strip()
        if not query:
            raise LocationNotFound("Empty location query")

        cache_key = f"geocode:search:{query.lower()}"
        cached = cache.get(cache_key)
        if cached:
            return Location(**cached)

        try:
            place = self.geocoder.geocode(query, exactly_one=True, timeout=self.timeout)
        except GeopyError as e:
            logger.error(f"Geocoding error for '{query}': {e}")
            raise LocationNotFound(f"Could not look up '{query}'") from e

        if not place:
            raise LocationNotFound(f"No results for '{query}'")

        location = Location(lat=place.latitude, lng=place.longitude, address=place.address)
        cache.set(cache_key, location.to_dict(), self.cache_ttl_seconds)
        return location

    def reverse(self, lat, lng, use_cache=True):
        """
        Reverse geocode coordinates to a Location.

        Never fails for valid coordinates: when geocoding errors out or
        finds nothing, the address is the formatted coordinate pair.

        Args:
            lat: latitude
            lng: longitude
            use_cache: whether to use cached results

        Returns:
            Location
        """
        # 3 decimal places is roughly 100m
        cache_key = f"geocode:reverse:{round(float(lat), 3)}:{round(float(lng), 3)}"
        if use_cache:
            address = cache.get(cache_key)
            if address:
                return Location(lat=lat, lng=lng, address=address)

        try:
            address = self._fetch_address(lat, lng)
        except GeopyError as e:
            logger.warning(f"Reverse geocoding error for ({lat}, {lng}): {e}")
            return Location(lat=lat, lng=lng, address=coordinate_label(lat, lng))

        if not address:
            return Location(lat=lat, lng=lng, address=coordinate_label(lat, lng))

        cache.set(cache_key, address, self.cache_ttl_seconds)
        return Location(lat=lat, lng=lng, address=address)

    def resolve_current_device_position(self, position_source):
        """
        Resolve the device's current position.

        Args:
            position_source: callable returning (lat, lng); raises
                PermissionDenied when the user refuses geolocation

        Returns:
            Location

        Raises:
            PermissionDenied: propagated from position_source
        """
        try:
            lat, lng = position_source()
        except PermissionDenied:
            logger.info("Device geolocation was denied")
            raise

        return self.reverse(lat, lng)

    def _fetch_address(self, lat, lng):
        """Fetch a short address for coordinates from the geocoder."""
        place = self.geocoder.reverse(f"{lat}, {lng}", language='en', timeout=self.timeout)
        if not place:
            return ''

        address = place.raw.get('address', {})
        return self._extract_name(address) or place.address or ''

    def _extract_name(self, address):
        """Extract city name from address components."""
        return (
            address.get('city') or
            address.get('town') or
            address.get('county') or
            ''
        )
