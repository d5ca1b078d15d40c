"""
Domain errors and the project-wide DRF exception handler.

Service functions raise the exceptions below; the handler turns every
API error into ``{"ok": false, "error": {"code": ..., "message": ...}}``
so clients always see the same envelope.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class InvalidQuantity(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Units must be a positive whole number.'
    default_code = 'invalid_quantity'


class InsufficientStock(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Insufficient units.'
    default_code = 'insufficient_stock'


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class MissingField(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Required field missing.'
    default_code = 'missing_field'

    def __init__(self, field=None, detail=None):
        if detail is None and field:
            detail = f'{field} is required'
        super().__init__(detail)


def _error_code(exc) -> str:
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        if isinstance(codes, str):
            return codes
        return getattr(exc, 'default_code', 'api_error')
    return 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('Unhandled error in %s', context.get('view').__class__.__name__, exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': 'Server error'}}, status=500)
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': _error_code(exc), 'message': detail}}, status=resp.status_code)
