"""
DRF serializers for API requests and responses.
"""
from rest_framework import serializers

from apps.core.utils import validate_coordinates
from apps.indices.readings import DisplayMode


class EnvironmentQuerySerializer(serializers.Serializer):
    """Query parameters for the environment endpoint."""
    q = serializers.CharField(required=False, allow_blank=False)
    lat = serializers.FloatField(required=False)
    lng = serializers.FloatField(required=False)
    address = serializers.CharField(required=False, allow_blank=True)
    mode = serializers.ChoiceField(
        choices=[mode.value for mode in DisplayMode],
        default=DisplayMode.AQI.value,
    )

    def validate(self, attrs):
        has_query = bool(attrs.get('q'))
        has_lat = 'lat' in attrs
        has_lng = 'lng' in attrs

        if has_lat != has_lng:
            raise serializers.ValidationError("Both lat and lng are required")

        if not has_query and not has_lat:
            raise serializers.ValidationError("Provide either q or lat and lng")

        if has_lat:
            is_valid, error = validate_coordinates(attrs['lat'], attrs['lng'])
            if not is_valid:
                raise serializers.ValidationError(error)

        return attrs


class HealthAdviceQuerySerializer(serializers.Serializer):
    """Query parameters for the health advice endpoint."""
    index = serializers.ChoiceField(choices=['aqi', 'wqi'], default='aqi')
    value = serializers.FloatField()


class LocationSerializer(serializers.Serializer):
    """Serializer for location information."""
    lat = serializers.FloatField()
    lng = serializers.FloatField()
    address = serializers.CharField(allow_blank=True)


class AirQualitySerializer(serializers.Serializer):
    """Serializer for an AirQualityReading."""
    aqi = serializers.IntegerField()
    pm25 = serializers.FloatField()
    pm10 = serializers.FloatField()
    o3 = serializers.FloatField()
    no2 = serializers.FloatField()
    so2 = serializers.FloatField()
    co = serializers.FloatField()
    category = serializers.CharField()
    color_key = serializers.CharField()
    advisory = serializers.CharField()


class WaterQualitySerializer(serializers.Serializer):
    """Serializer for a WaterQualityReading."""
    wqi = serializers.IntegerField()
    ph = serializers.FloatField()
    dissolved_oxygen = serializers.FloatField()
    turbidity = serializers.FloatField()
    temperature = serializers.FloatField()
    conductivity = serializers.FloatField()
    category = serializers.CharField()
    color_key = serializers.CharField()
    advisory = serializers.CharField()
    is_fallback = serializers.BooleanField()


class EnvironmentResponseSerializer(serializers.Serializer):
    """Main response serializer for the environment endpoint."""
    location = LocationSerializer(allow_null=True)
    state = serializers.CharField()
    error = serializers.CharField(allow_null=True)
    display_mode = serializers.CharField()
    air_quality = AirQualitySerializer(allow_null=True)
    water_quality = WaterQualitySerializer(allow_null=True)


class CategorySerializer(serializers.Serializer):
    """Serializer for one row of a classification ladder."""
    max_value = serializers.IntegerField(allow_null=True)
    category = serializers.CharField()
    color_key = serializers.CharField()
    health_message = serializers.CharField()
