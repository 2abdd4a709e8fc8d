"""
API error types and the project-wide DRF exception handler.

Every error leaves the API as ``{"ok": false, "error": msg, "mensaje": msg,
"code": code}``; field-level validation details go under ``"fields"``.
The client pages read either ``error`` or ``mensaje``.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class InvalidIdentifier(exceptions.NotFound):
    default_detail = 'ID invalido'
    default_code = 'invalid_id'


class InvalidCredentials(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Credenciales inválidas'
    default_code = 'invalid_credentials'


class DuplicateRecord(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'El registro ya existe'
    default_code = 'duplicate'


class RegistrationRejected(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Registro rechazado'
    default_code = 'registration_rejected'


def _first_message(data) -> str:
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        for key, value in data.items():
            msg = _first_message(value)
            if key == 'non_field_errors':
                return msg
            return f'{key}: {msg}'
        return ''
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''
    return str(data)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(exc.messages)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.error('unhandled error on %s', getattr(request, 'path', '?'), exc_info=exc)
        return Response(
            {'ok': False, 'error': str(exc), 'mensaje': str(exc), 'code': 'server_error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    message = _first_message(resp.data)
    body = {'ok': False, 'error': message, 'mensaje': message}
    if isinstance(exc, exceptions.ValidationError):
        body['code'] = 'validation_error'
        if isinstance(resp.data, dict):
            body['fields'] = resp.data
    else:
        detail = getattr(exc, 'detail', None)
        body['code'] = getattr(detail, 'code', None) or getattr(exc, 'default_code', 'api_error')
    headers = {k: resp[k] for k in ('WWW-Authenticate', 'Retry-After') if resp.has_header(k)}
    return Response(body, status=resp.status_code, headers=headers)
