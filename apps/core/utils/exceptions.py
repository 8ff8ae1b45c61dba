import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

STATE_ERROR_CODE = 'invalid_state'
NON_FIELD_KEY = 'non_field_errors'


def state_error(message, field=None):
    """A validation error for an operation attempted in the wrong lifecycle state."""
    if field:
        return DjangoValidationError({field: DjangoValidationError(message, code=STATE_ERROR_CODE)})
    return DjangoValidationError(message, code=STATE_ERROR_CODE)


def _error_codes(exc):
    if hasattr(exc, 'error_dict'):
        return {
            error.code
            for errors in exc.error_dict.values()
            for error in errors
        }
    return {error.code for error in exc.error_list}


def validation_error_payload(exc):
    if hasattr(exc, 'error_dict'):
        payload = {}
        for field, messages in exc.message_dict.items():
            payload[NON_FIELD_KEY if field == '__all__' else field] = messages
        return payload
    return {NON_FIELD_KEY: exc.messages}


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        response_status = status.HTTP_400_BAD_REQUEST
        if STATE_ERROR_CODE in _error_codes(exc):
            response_status = status.HTTP_409_CONFLICT

        view = context.get('view')
        logger.info(
            'Rejected %s: %s',
            view.__class__.__name__ if view else 'request',
            exc.messages,
        )
        return Response(validation_error_payload(exc), status=response_status)

    return exception_handler(exc, context)
