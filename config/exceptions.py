"""
Global exception handler for consistent API error responses.
Follows DRF convention and returns uniform structure.
"""
import logging
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.conf import settings

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns:
    { "detail": str, "code": str }
    Database failures are reported as an opaque 500 and logged with request context.
    """
    response = exception_handler(exc, context)
    if response is not None:
        data = response.data if isinstance(response.data, dict) else {'detail': _first_message(response.data)}
        if 'detail' not in data and response.data:
            data = {'detail': _first_message(response.data), 'errors': response.data}
        data.setdefault('detail', _get_detail(exc))
        data.setdefault('code', _get_code(exc))
        response.data = data
        return response

    if isinstance(exc, PermissionDenied):
        return Response(
            {'detail': str(exc) or 'Permission denied', 'code': 'permission_denied'},
            status=status.HTTP_403_FORBIDDEN
        )
    if isinstance(exc, DjangoValidationError):
        return Response(
            {'detail': str(exc), 'code': 'validation_error'},
            status=status.HTTP_400_BAD_REQUEST
        )

    request = context.get('request') if context else None
    view = context.get('view') if context else None
    path = request.path if request is not None else 'unknown'
    view_name = type(view).__name__ if view is not None else 'unknown'

    if isinstance(exc, DatabaseError):
        logger.exception('Persistence failure on %s (view=%s): %s', path, view_name, exc)
        return Response(
            {'detail': 'An internal error occurred.', 'code': 'persistence_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    logger.exception('Unhandled exception on %s (view=%s): %s', path, view_name, exc)
    error_detail = 'An internal error occurred.'
    if settings.DEBUG:
        error_detail = f'An internal error occurred: {str(exc)}'
    # Never expose stack traces to frontend; use standard API error format
    return Response(
        {'detail': error_detail, 'code': 'internal_error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _get_detail(exc):
    if hasattr(exc, 'detail'):
        d = exc.detail
        if isinstance(d, list):
            return d[0] if d else 'Error'
        if isinstance(d, dict):
            return d.get('detail', str(d))
        return str(d)
    return str(exc)


def _get_code(exc):
    default_code = getattr(exc, 'default_code', None)
    codes = {
        'AuthenticationFailed': 'invalid_credentials',
        'NotAuthenticated': 'not_authenticated',
        'NotFound': 'not_found',
        'PermissionDenied': 'permission_denied',
        'ValidationError': 'validation_error',
    }
    return codes.get(type(exc).__name__, default_code or 'error')


def _first_message(errors):
    """First human-readable message from a DRF error structure (dict/list/str)."""
    if isinstance(errors, dict):
        for key, value in errors.items():
            message = _first_message(value)
            if key in ('non_field_errors', 'detail'):
                return message
            return f'{key}: {message}'
        return 'Error'
    if isinstance(errors, list):
        return _first_message(errors[0]) if errors else 'Error'
    return str(errors)
