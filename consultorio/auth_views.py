"""
Account endpoints: register, login and password reset.

These live outside ``consultorio.views`` for the same reason as
``consultorio.authentication``: the REST framework imports authentication
classes at settings load, and keeping the login flow separate avoids
circular imports.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.exceptions import InvalidCredentials
from consultorio.serializers.auth import LoginSerializer, RegisterSerializer, ResetPasswordSerializer
from consultorio.services.audit import log_action
from consultorio.services.cuentas import (
    autenticar,
    emitir_token,
    formatear_usuario,
    registrar_usuario,
    restablecer_password,
)


def _ip(request):
    return request.META.get('REMOTE_ADDR')


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """
    Create an account.

    ``rol=paciente`` requires a doctor to have pre-registered the email;
    the matching paciente is linked to the new account.
    """
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = registrar_usuario(**s.validated_data)
    log_action(user=user, action='register', object_type='user', object_id=user.pk,
               detail={'rol': user.rol, 'ip': _ip(request)})
    return Response(
        {'mensaje': 'Usuario Creado', 'usuario': formatear_usuario(user)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']
    try:
        user = autenticar(email, s.validated_data['password'])
    except InvalidCredentials as e:
        # only the email is recorded for failed attempts
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'reason': e.detail.code, 'email': email, 'ip': _ip(request)})
        raise
    log_action(user=user, action='login', object_type='user', object_id=user.pk,
               detail={'result': 'ok', 'ip': _ip(request)})
    return Response({
        'ok': True,
        'mensaje': 'Login Exitoso',
        'rol': user.rol,
        'usuario': formatear_usuario(user),
        'token': emitir_token(user),
    })

# ScopedRateThrottle reads throttle_scope from the view class built by @api_view
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def reset_password_view(request):
    s = ResetPasswordSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = restablecer_password(s.validated_data['email'], s.validated_data['newPassword'])
    log_action(user=user, action='reset_password', object_type='user', object_id=user.pk,
               detail={'ip': _ip(request)})
    return Response({'mensaje': 'Contraseña actualizada', 'email': user.email})
