import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ConflictError(APIException):
    """Duplicate identity, application or skill."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class InvalidTransitionError(APIException):
    """Illegal application lifecycle move, e.g. withdrawing a selected application."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'This status change is not allowed.'
    default_code = 'invalid_transition'


def _flatten_message(data):
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        return 'Validation failed'
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def custom_exception_handler(exc, context):
    """Map every exception raised by a view to a JSON error payload."""
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=exc,
        )
        return Response(
            {
                'success': False,
                'message': 'Something went wrong!',
                'error': str(exc) if settings.DEBUG else None,
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    payload = {'success': False, 'message': _flatten_message(data)}
    if isinstance(data, dict) and 'detail' not in data:
        payload['errors'] = data
    elif isinstance(data, list):
        payload['errors'] = data
    response.data = payload
    return response
