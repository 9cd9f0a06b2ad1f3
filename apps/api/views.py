"""
API views exposing the environmental index engine.
"""
import logging
from concurrent.futures import TimeoutError as FuturesTimeoutError

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.constants import AQI_CATEGORIES, PROVIDER_ERROR_MESSAGE, WQI_CATEGORIES
from apps.core.utils import category_for_index
from apps.indices.readings import Location
from apps.location.services import LocationService

from .orchestrator import Error, RefreshOrchestrator
from .serializers import (
    CategorySerializer,
    EnvironmentQuerySerializer,
    EnvironmentResponseSerializer,
    HealthAdviceQuerySerializer,
)

logger = logging.getLogger(__name__)


def get_location_service():
    return LocationService()


def build_orchestrator():
    return RefreshOrchestrator()


def environment_payload(orchestrator, mode):
    """Snapshot of an orchestrator's display state."""
    snapshot = orchestrator.snapshot()
    location = snapshot.location or getattr(snapshot.state, 'location', None)
    air = snapshot.air_reading
    water = snapshot.water_reading

    return {
        'location': location.to_dict() if location else None,
        'state': snapshot.state.status,
        'error': snapshot.last_error,
        'display_mode': mode,
        'air_quality': air.to_dict() if air else None,
        'water_quality': water.to_dict() if water else None,
    }


class EnvironmentView(APIView):
    """
    GET /api/v1/environment/?lat=..&lng=..[&address=..][&mode=aqi|wqi]
    GET /api/v1/environment/?q=<place>[&mode=aqi|wqi]

    Resolves the location and runs one refresh cycle.
    """

    def get(self, request):
        query = EnvironmentQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        location = self._resolve_location(params)

        with build_orchestrator() as orchestrator:
            try:
                orchestrator.refresh(location)
            except FuturesTimeoutError:
                logger.error(f"Refresh timed out for {location.address}")
                return Response(
                    {'error': PROVIDER_ERROR_MESSAGE, 'code': status.HTTP_504_GATEWAY_TIMEOUT},
                    status=status.HTTP_504_GATEWAY_TIMEOUT,
                )
            payload = environment_payload(orchestrator, params['mode'])

        if payload['state'] == Error.status:
            logger.warning(f"Refresh failed for {location.address}: {payload['error']}")
            return Response(
                EnvironmentResponseSerializer(payload).data,
                status=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(EnvironmentResponseSerializer(payload).data)

    def _resolve_location(self, params):
        if params.get('q'):
            return get_location_service().resolve(params['q'])

        if params.get('address'):
            return Location(lat=params['lat'], lng=params['lng'], address=params['address'])

        return get_location_service().reverse(params['lat'], params['lng'])


class HealthAdviceView(APIView):
    """
    GET /api/v1/health-advice/?index=aqi|wqi&value=<number>
    """

    def get(self, request):
        query = HealthAdviceQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        index = query.validated_data['index'].upper()
        value = query.validated_data['value']
        category = category_for_index(value, index=index)

        return Response({
            'index': index,
            'value': value,
            'category': category['category'],
            'color_key': category['color_key'],
            'advisory': category['health_message'],
        })


class ScalesView(APIView):
    """GET /api/v1/scales/ - both classification ladders for legends."""

    def get(self, request):
        return Response({
            'aqi': CategorySerializer(AQI_CATEGORIES, many=True).data,
            'wqi': CategorySerializer(WQI_CATEGORIES, many=True).data,
        })


class HealthCheckView(APIView):
    """GET /api/v1/health/"""

    def get(self, request):
        return Response({'status': 'ok'})
