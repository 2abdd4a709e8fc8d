"""
Account registration, login and password reset.

A ``paciente`` account can only be created for an email a doctor
pre-registered as a :class:`Paciente` that is not yet linked; the link
(``registrado=True`` and ``user``) is written in the same transaction as
the account, exactly once.
"""
from __future__ import annotations

import logging

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework.authtoken.models import Token
from rest_framework.exceptions import NotFound, ValidationError

from consultorio.exceptions import InvalidCredentials, RegistrationRejected
from consultorio.models import Paciente, User

logger = logging.getLogger(__name__)

MSG_SIN_PRE_REGISTRO = 'El correo no fue pre-registrado por un doctor. Pídale al doctor que lo agregue antes.'
MSG_YA_REGISTRADO = 'Paciente ya registrado. Inicie sesión.'
MSG_EMAIL_EN_USO = 'El correo ya fue registrado'


def formatear_usuario(user: User) -> dict:
    return {
        'id': str(user.pk),
        'nombre': user.nombre,
        'email': user.email,
        'rol': user.rol,
    }


def formatear_usuario_completo(user: User) -> dict:
    return {
        **formatear_usuario(user),
        '_id': str(user.pk),
        'historial': list(user.historial or []),
        'medicina': list(user.medicina or []),
    }


def _validar_password(password: str, user: User | None = None) -> None:
    try:
        validate_password(password, user)
    except DjangoValidationError as e:
        raise ValidationError({'password': e.messages})


def registrar_usuario(*, nombre: str, email: str, password: str, rol: str,
                      historial=None, medicina=None) -> User:
    paciente = None
    if rol == User.ROL_PACIENTE:
        paciente = Paciente.objects.filter(email=email).first()
        if paciente is None:
            raise RegistrationRejected(MSG_SIN_PRE_REGISTRO, code='not_pre_registered')
        if paciente.registrado:
            raise RegistrationRejected(MSG_YA_REGISTRADO, code='already_registered')
    if User.objects.filter(email=email).exists():
        raise RegistrationRejected(MSG_EMAIL_EN_USO, code='email_in_use')
    _validar_password(password)

    with transaction.atomic():
        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            nombre=nombre,
            rol=rol,
            historial=[dict(h) for h in historial or []],
            medicina=[dict(m) for m in medicina or []],
        )
        if paciente is not None:
            linked = Paciente.objects.filter(pk=paciente.pk, registrado=False).update(
                registrado=True, user=user
            )
            if not linked:
                # lost a race with another registration for the same paciente
                raise RegistrationRejected(MSG_YA_REGISTRADO, code='already_registered')
    logger.info('usuario %s registrado con rol %s', user.pk, rol)
    return user


def autenticar(email: str, password: str) -> User:
    user = User.objects.filter(email=email).first()
    if user is None:
        raise InvalidCredentials('Usuario no encontrado', code='user_not_found')
    if not user.check_password(password):
        raise InvalidCredentials('Contraseña Incorrecta', code='wrong_password')
    return user


def emitir_token(user: User) -> str:
    token, _ = Token.objects.get_or_create(user=user)
    return token.key


def restablecer_password(email: str, nueva: str) -> User:
    """Overwrite the password for ``email`` and revoke its issued tokens."""
    user = User.objects.filter(email=email).first()
    if user is None:
        raise NotFound('Usuario no encontrado')
    _validar_password(nueva, user)
    with transaction.atomic():
        user.set_password(nueva)
        user.save(update_fields=['password'])
        Token.objects.filter(user=user).delete()
    return user
