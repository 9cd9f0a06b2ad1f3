"""
Management command to print the air and water quality for one location.
"""
from concurrent.futures import TimeoutError as FuturesTimeoutError

from django.core.management.base import BaseCommand, CommandError

from apps.api.orchestrator import Error, RefreshOrchestrator
from apps.core.constants import POLLUTANTS, WATER_PARAMETERS
from apps.core.exceptions import LocationNotFound
from apps.indices.readings import DisplayMode, Location
from apps.location.services import LocationService


class Command(BaseCommand):
    help = 'Fetch and print the AQI and synthetic WQI for a place or coordinates'

    def add_arguments(self, parser):
        parser.add_argument('--query', help='Place name or address to look up')
        parser.add_argument('--lat', type=float, help='Latitude')
        parser.add_argument('--lng', type=float, help='Longitude')
        parser.add_argument('--address', help='Label to use with --lat/--lng')
        parser.add_argument(
            '--mode',
            choices=[mode.value for mode in DisplayMode],
            help='Only print one index',
        )

    def handle(self, *args, **options):
        location = self.resolve_location(options)
        self.stdout.write(f'Location: {location.address} ({location.lat}, {location.lng})')

        with RefreshOrchestrator() as orchestrator:
            try:
                orchestrator.refresh(location)
            except FuturesTimeoutError:
                raise CommandError(f"Timed out refreshing {location.address}")

        snapshot = orchestrator.snapshot()
        if isinstance(snapshot.state, Error):
            raise CommandError(snapshot.state.message)

        mode = options.get('mode')
        if mode in (None, DisplayMode.AQI.value):
            self.print_air(snapshot.air_reading)
        if mode in (None, DisplayMode.WQI.value):
            self.print_water(snapshot.water_reading)

    def resolve_location(self, options):
        service = LocationService()

        if options.get('query'):
            try:
                return service.resolve(options['query'])
            except LocationNotFound as e:
                raise CommandError(str(e))

        if options.get('lat') is None or options.get('lng') is None:
            raise CommandError('Provide --query or both --lat and --lng')

        try:
            if options.get('address'):
                return Location(options['lat'], options['lng'], options['address'])
            return service.reverse(options['lat'], options['lng'])
        except ValueError as e:
            raise CommandError(str(e))

    def print_air(self, reading):
        self.stdout.write(self.style.SUCCESS(
            f'\nAQI {reading.aqi} - {reading.category}'
        ))
        self.stdout.write(f'  {reading.advisory}')
        for field, meta in POLLUTANTS.items():
            self.stdout.write(f"  {meta['name']:<8} {getattr(reading, field):>8} {meta['unit']}")

    def print_water(self, reading):
        if reading is None:
            self.stdout.write(self.style.WARNING('\nWQI unavailable'))
            return

        label = ' (fallback)' if reading.is_fallback else ''
        self.stdout.write(self.style.SUCCESS(
            f'\nWQI {reading.wqi} - {reading.category}{label}'
        ))
        self.stdout.write(f'  {reading.advisory}')
        for field, meta in WATER_PARAMETERS.items():
            self.stdout.write(f"  {meta['name']:<18} {getattr(reading, field):>8.2f} {meta['unit']}")
