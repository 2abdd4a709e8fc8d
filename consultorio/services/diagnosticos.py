from __future__ import annotations

from consultorio.models import Diagnostico
from consultorio.services.fechas import a_iso
from consultorio.services.ids import uuid_o_none
from consultorio.services.pacientes import paciente_para_snapshot

CAMPOS = {
    'fecha': 'fecha',
    'diagnostico': 'diagnostico',
    'tratamiento': 'tratamiento',
    'observaciones': 'observaciones',
    'doctorNombre': 'doctor_nombre',
    'notasMedico': 'notas_medico',
}


def formatear_diagnostico(d: Diagnostico) -> dict:
    return {
        '_id': str(d.pk),
        'id': str(d.pk),
        'pacienteId': str(d.paciente_id),
        'pacienteNombre': d.paciente_nombre,
        'pacienteApellido': d.paciente_apellido,
        'fecha': a_iso(d.fecha),
        'diagnostico': d.diagnostico,
        'tratamiento': d.tratamiento,
        'observaciones': d.observaciones,
        'doctorNombre': d.doctor_nombre,
        'notasMedico': d.notas_medico,
        'createdAt': a_iso(d.created_at),
        'updatedAt': a_iso(d.updated_at),
    }


def crear_diagnostico(datos: dict) -> Diagnostico:
    paciente = paciente_para_snapshot(datos['pacienteId'])
    campos = {CAMPOS[k]: v for k, v in datos.items() if k in CAMPOS}
    return Diagnostico.objects.create(
        paciente=paciente,
        paciente_nombre=paciente.nombre,
        paciente_apellido=paciente.apellido,
        **campos,
    )


def actualizar_diagnostico(diag: Diagnostico, datos: dict) -> Diagnostico:
    for key, value in datos.items():
        if key in CAMPOS:
            setattr(diag, CAMPOS[key], value)
    diag.save()
    return diag


def listar_diagnosticos():
    return Diagnostico.objects.order_by('-fecha')


def diagnosticos_por_paciente(paciente_id):
    key = uuid_o_none(paciente_id)
    if key is None:
        return Diagnostico.objects.none()
    return Diagnostico.objects.filter(paciente_id=key).order_by('-fecha')
