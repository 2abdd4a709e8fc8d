"""
Cita (appointment) views.

``fechaCita`` is always stored as UTC midnight of the calendar day the
client sent; the by-date and today listings match that day as the
half-open interval ``[day, day + 1)``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.models import Cita
from consultorio.serializers.cita import CitaCreateSerializer, CitaFechaSerializer, CitaUpdateSerializer
from consultorio.serializers.fields import con_valores_actuales
from consultorio.services.citas import (
    actualizar_cita,
    citas_de_hoy,
    citas_por_fecha,
    citas_por_paciente,
    crear_cita,
    formatear_cita,
    listar_citas,
)
from consultorio.services.ids import get_or_404


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def citas_list(request):
    if request.method == 'GET':
        return Response([formatear_cita(c) for c in listar_citas()])
    s = CitaCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    cita = crear_cita(s.validated_data)
    return Response(formatear_cita(cita), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def cita_detail(request, pk: str):
    cita = get_or_404(Cita, pk, 'Cita no encontrada')
    if request.method == 'GET':
        return Response(formatear_cita(cita))
    if request.method == 'PUT':
        s = CitaUpdateSerializer(data=con_valores_actuales(formatear_cita(cita), request.data))
        s.is_valid(raise_exception=True)
        cita = actualizar_cita(cita, s.validated_data)
        return Response(formatear_cita(cita))
    # DELETE
    cita_id = str(cita.pk)
    cita.delete()
    return Response({'message': 'Cita eliminada correctamente', 'id': cita_id})


@api_view(['GET'])
@permission_classes([AllowAny])
def citas_paciente(request, paciente_id: str):
    return Response([formatear_cita(c) for c in citas_por_paciente(paciente_id)])


@api_view(['GET'])
@permission_classes([AllowAny])
def citas_fecha(request, fecha: str):
    s = CitaFechaSerializer(data={'fecha': fecha})
    s.is_valid(raise_exception=True)
    return Response([formatear_cita(c) for c in citas_por_fecha(s.validated_data['fecha'])])


@api_view(['GET'])
@permission_classes([AllowAny])
def citas_hoy(request):
    return Response([formatear_cita(c) for c in citas_de_hoy()])
