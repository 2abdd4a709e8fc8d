"""
Prescription services.

Creating a receta also adds it to the owning paciente's ``recetas`` set
inside the same transaction.  Deleting one pulls it from that set first;
that cleanup is best-effort: a failure is logged and the delete goes on.
``reconciliar_recetas`` rebuilds every set from the receta table.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from consultorio.models import Diagnostico, Paciente, Receta
from consultorio.services.fechas import a_iso
from consultorio.services.ids import uuid_o_none
from consultorio.services.pacientes import paciente_para_snapshot

logger = logging.getLogger(__name__)

CAMPOS = {
    'fechaEmision': 'fecha_emision',
    'fechaValidez': 'fecha_validez',
    'instruccionesGenerales': 'instrucciones_generales',
    'notasMedico': 'notas_medico',
    'doctorNombre': 'doctor_nombre',
    'estado': 'estado',
}


def formatear_receta(r: Receta) -> dict:
    return {
        '_id': str(r.pk),
        'id': str(r.pk),
        'pacienteId': str(r.paciente_id),
        'pacienteNombre': r.paciente_nombre,
        'pacienteApellido': r.paciente_apellido,
        'pacienteEdad': r.paciente_edad,
        'pacienteGenero': r.paciente_genero,
        'fechaEmision': a_iso(r.fecha_emision),
        'fechaValidez': a_iso(r.fecha_validez),
        'diagnostico': dict(r.diagnostico or {}),
        'diagnosticoId': str(r.diagnostico_ref_id) if r.diagnostico_ref_id else None,
        'medicamentos': list(r.medicamentos or []),
        'instruccionesGenerales': r.instrucciones_generales,
        'notasMedico': r.notas_medico,
        'doctorNombre': r.doctor_nombre,
        'estado': r.estado,
        'createdAt': a_iso(r.created_at),
        'updatedAt': a_iso(r.updated_at),
    }


def formatear_resumen(r: Receta) -> dict:
    resumen = r.resumen()
    resumen['fechaEmision'] = a_iso(resumen['fechaEmision'])
    resumen['fechaValidez'] = a_iso(resumen['fechaValidez'])
    resumen['medicamentos'] = r.medicamentos_formateados()
    resumen['estaActiva'] = r.esta_activa()
    return resumen


def _diagnostico_ref(valor):
    if not valor:
        return None
    diag = Diagnostico.objects.filter(pk=valor).first()
    if diag is None:
        raise ValidationError({'diagnosticoId': ['Diagnostico no encontrado']})
    return diag


def _aplicar(receta: Receta, datos: dict) -> None:
    for key, value in datos.items():
        if key in CAMPOS:
            setattr(receta, CAMPOS[key], value)
    if 'diagnostico' in datos:
        receta.diagnostico = dict(datos['diagnostico'])
    if 'medicamentos' in datos:
        receta.medicamentos = [dict(m) for m in datos['medicamentos']]
    if 'diagnosticoId' in datos:
        receta.diagnostico_ref = _diagnostico_ref(datos['diagnosticoId'])


def crear_receta(datos: dict) -> Receta:
    paciente = paciente_para_snapshot(datos['pacienteId'])
    receta = Receta(
        paciente=paciente,
        paciente_nombre=paciente.nombre,
        paciente_apellido=paciente.apellido,
        paciente_edad=paciente.edad,
        paciente_genero=paciente.genero,
    )
    _aplicar(receta, datos)
    with transaction.atomic():
        receta.save()
        paciente.recetas.add(receta)
    return receta


def actualizar_receta(receta: Receta, datos: dict) -> Receta:
    _aplicar(receta, datos)
    receta.save()
    return receta


def eliminar_receta(receta: Receta) -> None:
    try:
        with transaction.atomic():
            Paciente.recetas.through.objects.filter(
                paciente_id=receta.paciente_id, receta_id=receta.pk
            ).delete()
    except DatabaseError:
        logger.exception('no se pudo retirar la receta %s del paciente %s', receta.pk, receta.paciente_id)
    receta.delete()


def refrescar_estado(receta: Receta) -> Receta:
    """Persist the expirada flip for a receta read past its validity."""
    if receta.marcar_como_expirada():
        receta.save(update_fields=['estado', 'updated_at'])
    return receta


def expirar_vencidas() -> int:
    """Flip every activa receta past its validity date; returns the count."""
    return Receta.objects.filter(
        estado=Receta.ESTADO_ACTIVA, fecha_validez__lt=timezone.now()
    ).update(estado=Receta.ESTADO_EXPIRADA, updated_at=timezone.now())


def listar_recetas():
    expirar_vencidas()
    return Receta.objects.order_by('-created_at')


def recetas_por_paciente(paciente_id):
    key = uuid_o_none(paciente_id)
    if key is None:
        return Receta.objects.none()
    expirar_vencidas()
    return Receta.objects.filter(paciente_id=key).order_by('-created_at')


def recetas_por_doctor(doctor_nombre: str):
    expirar_vencidas()
    return Receta.objects.filter(doctor_nombre=doctor_nombre).order_by('-fecha_emision')


def recetas_activas():
    return Receta.objects.filter(
        estado=Receta.ESTADO_ACTIVA, fecha_validez__gte=timezone.now()
    ).order_by('fecha_validez')


def proximas_a_expirar(dias: int | None = None):
    if dias is None:
        dias = settings.RECETAS_DIAS_POR_EXPIRAR
    ahora = timezone.now()
    return Receta.objects.filter(
        estado=Receta.ESTADO_ACTIVA,
        fecha_validez__gte=ahora,
        fecha_validez__lte=ahora + timedelta(days=dias),
    ).order_by('fecha_validez')


def estadisticas() -> dict:
    expirar_vencidas()
    ahora = timezone.now()
    conteos = Receta.objects.aggregate(
        total=Count('id'),
        activas=Count('id', filter=Q(estado=Receta.ESTADO_ACTIVA)),
        expiradas=Count('id', filter=Q(estado=Receta.ESTADO_EXPIRADA)),
        canceladas=Count('id', filter=Q(estado=Receta.ESTADO_CANCELADA)),
        expiranEstaSemana=Count('id', filter=Q(
            estado=Receta.ESTADO_ACTIVA,
            fecha_validez__gte=ahora,
            fecha_validez__lte=ahora + timedelta(days=7),
        )),
    )
    total = conteos['total']
    conteos['porcentajeActivas'] = round(conteos['activas'] / total * 100, 1) if total else 0
    return conteos


def reconciliar_recetas() -> tuple[int, int]:
    """Rebuild every paciente's recetas set; returns (added, removed)."""
    through = Paciente.recetas.through
    esperadas = set(Receta.objects.values_list('paciente_id', 'id'))
    actuales = set(through.objects.values_list('paciente_id', 'receta_id'))
    faltantes = esperadas - actuales
    sobrantes = actuales - esperadas
    with transaction.atomic():
        through.objects.bulk_create(
            [through(paciente_id=p, receta_id=r) for p, r in faltantes]
        )
        for p, r in sobrantes:
            through.objects.filter(paciente_id=p, receta_id=r).delete()
    return len(faltantes), len(sobrantes)
