from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from consultorio.exceptions import DuplicateRecord
from consultorio.models import Paciente, User
from consultorio.services.fechas import a_iso

logger = logging.getLogger(__name__)

CAMPOS = {
    'nombre': 'nombre',
    'apellido': 'apellido',
    'edad': 'edad',
    'genero': 'genero',
    'telefono': 'telefono',
    'email': 'email',
    'direccion': 'direccion',
    'condicionesMedicas': 'condiciones_medicas',
    'alergias': 'alergias',
    'medicamentosActuales': 'medicamentos_actuales',
}


def formatear_paciente(p: Paciente) -> dict:
    return {
        '_id': str(p.pk),
        'id': str(p.pk),
        'nombre': p.nombre,
        'apellido': p.apellido,
        'edad': p.edad,
        'genero': p.genero,
        'telefono': p.telefono,
        'email': p.email,
        'direccion': p.direccion,
        'condicionesMedicas': list(p.condiciones_medicas or []),
        'alergias': p.alergias,
        'medicamentosActuales': p.medicamentos_actuales,
        'registrado': p.registrado,
        'user': str(p.user_id) if p.user_id else None,
        'recetas': [str(r.pk) for r in p.recetas.all()],
        'createdAt': a_iso(p.created_at),
        'updatedAt': a_iso(p.updated_at),
    }


def paciente_para_snapshot(paciente_id) -> Paciente:
    """Resolve the patient a new cita/receta/diagnostico points to."""
    paciente = Paciente.objects.filter(pk=paciente_id).first()
    if paciente is None:
        raise ValidationError({'pacienteId': ['Paciente no encontrado']})
    return paciente


def crear_paciente(datos: dict, *, pre_registro: bool = False) -> Paciente:
    """Create a patient record with ``registrado=False``.

    The email must be free among patients.  Outside doctor
    pre-registration it must also not belong to an existing account.
    """
    email = datos['email']
    if Paciente.objects.filter(email=email).exists():
        raise DuplicateRecord('Paciente ya pre-registrado')
    if not pre_registro and User.objects.filter(email=email).exists():
        raise DuplicateRecord('El paciente ya fue registrado')
    campos = {CAMPOS[k]: v for k, v in datos.items() if k in CAMPOS}
    try:
        with transaction.atomic():
            paciente = Paciente.objects.create(registrado=False, **campos)
    except IntegrityError:
        # a concurrent create took the email between the check and the insert
        raise DuplicateRecord('Paciente ya pre-registrado')
    logger.info('paciente %s creado (pre_registro=%s)', paciente.pk, pre_registro)
    return paciente


def actualizar_paciente(paciente: Paciente, datos: dict) -> Paciente:
    email = datos.get('email')
    if email and Paciente.objects.filter(email=email).exclude(pk=paciente.pk).exists():
        raise DuplicateRecord('Otro paciente ya usa ese email')
    if email and User.objects.filter(email=email).exclude(pk=paciente.user_id).exists():
        raise DuplicateRecord('El email pertenece a otra cuenta')
    for key, value in datos.items():
        if key in CAMPOS:
            setattr(paciente, CAMPOS[key], value)
    try:
        with transaction.atomic():
            paciente.save()
    except IntegrityError:
        raise DuplicateRecord('Otro paciente ya usa ese email')
    return paciente


def pacientes_qs():
    return Paciente.objects.prefetch_related('recetas').order_by('created_at')
