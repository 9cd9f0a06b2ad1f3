"""Tests for the WQI synthesizer."""
import random

import pytest

from apps.core.exceptions import ProviderUnreachable
from apps.indices.readings import Location
from apps.indices.wqi import WQISynthesizer, compute_wqi

from .conftest import HighRandom, LowRandom, WEATHER_PAYLOAD


def weather(temperature=None, humidity=None, precipitation=None):
    current = {}
    if temperature is not None:
        current['temperature_2m'] = temperature
    if humidity is not None:
        current['relative_humidity_2m'] = humidity
    if precipitation is not None:
        current['precipitation'] = precipitation
    return {'current': current}


class TestComputeWQI:

    def test_mild_weather_northern_tropics(self):
        # 50 + 2.5 * 1.5 + 0 + 0 + 5 = 58.75
        assert compute_wqi(20, 50, 0, lat=10, lng=20) == 59

    def test_deviation_of_exactly_fifteen_is_not_capped(self):
        # |37.5 - 22.5| == 15 is not > 15, so the factor is 22.5, not 20
        assert compute_wqi(37.5, 50, 0, lat=10, lng=0) == 78

    def test_extreme_temperature_is_capped(self):
        # 50 + 20 + 0 + 0 - 15 - 10 = 45
        assert compute_wqi(200, 50, 0, lat=89, lng=179) == 45

    @pytest.mark.parametrize("humidity, expected", [
        (29, 69), (30, 59), (80, 59), (81, 74),
    ])
    def test_humidity_thresholds(self, humidity, expected):
        assert compute_wqi(20, humidity, 0, lat=10, lng=20) == expected

    @pytest.mark.parametrize("precipitation, expected", [
        (2, 59), (2.1, 74), (5, 74), (5.1, 84),
    ])
    def test_precipitation_thresholds(self, precipitation, expected):
        assert compute_wqi(20, 50, precipitation, lat=10, lng=20) == expected

    @pytest.mark.parametrize("lat, lng, expected", [
        (45, 0, 59),      # not > 45, northern: +5
        (46, 0, 39),      # high latitude: -15
        (-46, 0, 39),
        (0, 0, 49),       # equator counts as southern: -5
        (-10, 0, 49),
        (10, 100, 59),    # not > 100
        (10, -101, 49),   # far longitude: -10
    ])
    def test_positional_variation(self, lat, lng, expected):
        assert compute_wqi(20, 50, 0, lat=lat, lng=lng) == expected

    def test_clamped_to_upper_bound(self):
        # 50 + 20 + 15 + 25 + 5 = 115
        assert compute_wqi(100, 90, 10, lat=10, lng=0) == 100

    @pytest.mark.parametrize("temperature", [-273, -50, 0, 22.5, 60, 200, 1e6])
    @pytest.mark.parametrize("lat, lng", [(89, 179), (-89, -179), (0, 0), (45, 100)])
    def test_always_in_range(self, temperature, lat, lng):
        for humidity, precipitation in [(0, 0), (100, 100), (50, 3)]:
            wqi = compute_wqi(temperature, humidity, precipitation, lat, lng)
            assert 0 <= wqi <= 100
            assert isinstance(wqi, int)


class TestSynthesize:

    def test_reading_with_pinned_randomness(self, synthesizer, location):
        reading = synthesizer.synthesize(WEATHER_PAYLOAD, location)

        assert reading.wqi == 59
        assert reading.category == "Fair"
        assert reading.color_key == "yellow"
        assert reading.ph == pytest.approx(6.5)
        assert reading.dissolved_oxygen == pytest.approx(10.0)
        assert reading.turbidity == pytest.approx(2.5)
        assert reading.temperature == 20
        assert reading.conductivity == pytest.approx(440.0)
        assert reading.is_fallback is False

    @pytest.mark.parametrize("wqi_inputs, category, color_key", [
        ((22.5, 50, 0, 60, 150), "Excellent", "green"),
        ((22.5, 50, 0, -10, 0), "Good", "emerald"),
        ((22.5, 50, 0, 10, 0), "Fair", "yellow"),
        ((20, 50, 5.1, 10, 0), "Poor", "orange"),
        ((100, 90, 10, 10, 0), "Very Poor", "red"),
    ])
    def test_categories(self, wqi_inputs, category, color_key):
        temperature, humidity, precipitation, lat, lng = wqi_inputs
        synthesizer = WQISynthesizer(rng=LowRandom())
        reading = synthesizer.synthesize(
            weather(temperature, humidity, precipitation),
            Location(lat=lat, lng=lng, address=""),
        )

        assert reading.category == category
        assert reading.color_key == color_key

    def test_missing_weather_fields_use_defaults(self, synthesizer, location):
        reading = synthesizer.synthesize({'current': {}}, location)

        assert reading.temperature == 20
        assert reading.wqi == 59

    def test_missing_current_block_uses_defaults(self, synthesizer, location):
        reading = synthesizer.synthesize({}, location)

        assert reading.wqi == 59
        assert reading.is_fallback is False

    def test_null_weather_fields_use_defaults(self, synthesizer, location):
        reading = synthesizer.synthesize(
            {'current': {'temperature_2m': None, 'relative_humidity_2m': None, 'precipitation': None}},
            location,
        )

        assert reading.temperature == 20
        assert reading.wqi == 59

    def test_ph_clamped(self, location):
        hot = WQISynthesizer(rng=HighRandom()).synthesize(weather(80), location)
        cold = WQISynthesizer(rng=LowRandom()).synthesize(weather(-40), location)

        assert hot.ph == 9
        assert cold.ph == 5

    def test_dissolved_oxygen_floored_at_two(self, location):
        # 10 - 60 * 0.2 = -2 before jitter
        reading = WQISynthesizer(rng=HighRandom()).synthesize(weather(80), location)

        assert reading.dissolved_oxygen == 2

    def test_jitter_extremes(self, location):
        low = WQISynthesizer(rng=LowRandom()).synthesize(weather(20), location)
        high = WQISynthesizer(rng=HighRandom()).synthesize(weather(20), location)

        assert low.ph == pytest.approx(6.25)
        assert high.ph == pytest.approx(6.75)
        assert low.dissolved_oxygen == pytest.approx(9.5)
        assert high.dissolved_oxygen == pytest.approx(10.5)
        assert low.turbidity == pytest.approx(1.5)
        assert high.turbidity == pytest.approx(3.5)
        assert low.conductivity == pytest.approx(340.0)
        assert high.conductivity == pytest.approx(540.0)


class TestRandomizedBounds:
    """The four jittered parameters are only checked against their documented bounds."""

    @pytest.mark.parametrize("temperature, lat, lng", [
        (20, 10, 20),
        (35, -60, 170),
        (-5, 89, -179),
        (200, 89, 179),
    ])
    def test_bounds(self, temperature, lat, lng):
        synthesizer = WQISynthesizer(rng=random.Random(1234))
        place = Location(lat=lat, lng=lng, address="")
        ph_base = 6.5 + (temperature - 20) * 0.1
        do_base = 10 - (temperature - 20) * 0.2
        turbidity_base = 2 + abs(lat) * 0.05
        conductivity_base = 400 + abs(lng) * 2

        for _ in range(200):
            reading = synthesizer.synthesize(weather(temperature), place)

            assert 5 <= reading.ph <= 9
            assert min(max(ph_base - 0.25, 5), 9) <= reading.ph <= min(max(ph_base + 0.25, 5), 9)
            assert reading.dissolved_oxygen >= 2
            assert reading.dissolved_oxygen <= max(2, do_base + 0.5)
            assert turbidity_base - 1 <= reading.turbidity <= turbidity_base + 1
            assert conductivity_base - 100 <= reading.conductivity <= conductivity_base + 100

    def test_wqi_is_deterministic(self, location):
        first = WQISynthesizer().synthesize(WEATHER_PAYLOAD, location)
        second = WQISynthesizer().synthesize(WEATHER_PAYLOAD, location)

        assert first.wqi == second.wqi
        assert first.category == second.category


class TestFallback:

    def test_fallback_reading(self):
        reading = WQISynthesizer.fallback_reading()

        assert reading.wqi == 65
        assert reading.ph == 7.2
        assert reading.dissolved_oxygen == 8.5
        assert reading.turbidity == 4.2
        assert reading.temperature == 20
        assert reading.conductivity == 750
        assert reading.category == "Fair"
        assert reading.color_key == "yellow"
        assert reading.is_fallback is True

    @pytest.mark.parametrize("error", [
        ProviderUnreachable("Open-Meteo Forecast", "timed out"),
        RuntimeError("boom"),
    ])
    def test_provider_failure_yields_fallback(self, synthesizer, location, error):
        def fetch_weather(lat, lng):
            raise error

        for _ in range(3):
            reading = synthesizer.compute(fetch_weather, location)
            assert (reading.wqi, reading.category, reading.color_key, reading.temperature) == (
                65, "Fair", "yellow", 20
            )

    def test_non_object_payload_yields_fallback(self, synthesizer, location):
        reading = synthesizer.compute(lambda lat, lng: ["unexpected"], location)

        assert reading.is_fallback is True

    def test_successful_fetch_is_synthesized(self, synthesizer, location):
        calls = []

        def fetch_weather(lat, lng):
            calls.append((lat, lng))
            return WEATHER_PAYLOAD

        reading = synthesizer.compute(fetch_weather, location)

        assert calls == [(10.0, 20.0)]
        assert reading.is_fallback is False
        assert reading.wqi == 59
