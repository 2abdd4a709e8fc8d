from __future__ import annotations

from django.utils import timezone

from consultorio.models import Cita
from consultorio.services.fechas import a_iso, intervalo_dia
from consultorio.services.ids import uuid_o_none
from consultorio.services.pacientes import paciente_para_snapshot

CAMPOS = {
    'fechaCita': 'fecha_cita',
    'horaCita': 'hora_cita',
    'motivo': 'motivo',
    'estado': 'estado',
    'doctorNombre': 'doctor_nombre',
    'notas': 'notas',
}


def formatear_cita(c: Cita) -> dict:
    return {
        '_id': str(c.pk),
        'id': str(c.pk),
        'pacienteId': str(c.paciente_id),
        'pacienteNombre': c.paciente_nombre,
        'pacienteApellido': c.paciente_apellido,
        'pacienteEdad': c.paciente_edad,
        'pacienteGenero': c.paciente_genero,
        'pacienteEmail': c.paciente_email,
        'fechaCita': a_iso(c.fecha_cita),
        'horaCita': c.hora_cita,
        'motivo': c.motivo,
        'estado': c.estado,
        'doctorNombre': c.doctor_nombre,
        'notas': c.notas,
        'createdAt': a_iso(c.created_at),
        'updatedAt': a_iso(c.updated_at),
    }


def crear_cita(datos: dict) -> Cita:
    paciente = paciente_para_snapshot(datos['pacienteId'])
    campos = {CAMPOS[k]: v for k, v in datos.items() if k in CAMPOS}
    return Cita.objects.create(
        paciente=paciente,
        paciente_nombre=paciente.nombre,
        paciente_apellido=paciente.apellido,
        paciente_edad=paciente.edad,
        paciente_genero=paciente.genero,
        paciente_email=paciente.email,
        **campos,
    )


def actualizar_cita(cita: Cita, datos: dict) -> Cita:
    # patient snapshot fields are left untouched
    for key, value in datos.items():
        if key in CAMPOS:
            setattr(cita, CAMPOS[key], value)
    cita.save()
    return cita


def listar_citas():
    return Cita.objects.order_by('fecha_cita', 'hora_cita')


def citas_por_paciente(paciente_id):
    key = uuid_o_none(paciente_id)
    if key is None:
        return Cita.objects.none()
    return Cita.objects.filter(paciente_id=key).order_by('fecha_cita')


def citas_por_fecha(fecha):
    """Citas whose day falls in ``[fecha, fecha + 1 day)`` UTC, by hour."""
    inicio, fin = intervalo_dia(fecha)
    return Cita.objects.filter(fecha_cita__gte=inicio, fecha_cita__lt=fin).order_by('hora_cita')


def citas_de_hoy():
    return citas_por_fecha(timezone.now())
