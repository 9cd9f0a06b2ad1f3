"""
Custom exception handlers for API.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

from apps.core.exceptions import (
    EnvironmentalIndexError,
    LocationNotFound,
    NoDataAvailable,
    PermissionDenied,
    ProviderUnreachable,
)

logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS = {
    LocationNotFound: status.HTTP_404_NOT_FOUND,
    PermissionDenied: status.HTTP_403_FORBIDDEN,
    ProviderUnreachable: status.HTTP_502_BAD_GATEWAY,
    NoDataAvailable: status.HTTP_502_BAD_GATEWAY,
}


def custom_exception_handler(exc, context):
    """
    Custom exception handler for DRF.
    Logs errors and provides consistent error responses.
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    logger.error(f"API Exception: {exc}", exc_info=response is None)

    if isinstance(exc, EnvironmentalIndexError):
        code = DOMAIN_ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({'error': str(exc), 'code': code}, status=code)

    # If DRF didn't handle it, create custom response
    if response is None:
        return Response(
            {
                'error': 'Internal server error',
                'detail': 'An error occurred',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    # Customize error response format
    if isinstance(response.data, dict):
        detail = response.data.get('detail')
        if detail is None:
            detail = response.data.get('non_field_errors', response.data)
        error_data = {
            'error': detail,
            'code': response.status_code
        }
        response.data = error_data

    return response
