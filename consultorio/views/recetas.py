"""
Receta (prescription) views.

Listings flip activa recetas past their ``fechaValidez`` to expirada
before reading; a single receta is refreshed the same way when fetched.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.models import Receta
from consultorio.serializers.fields import con_valores_actuales
from consultorio.serializers.receta import (
    ProximasAExpirarSerializer,
    RecetaCreateSerializer,
    RecetaUpdateSerializer,
)
from consultorio.services.ids import get_or_404
from consultorio.services.recetas import (
    actualizar_receta,
    crear_receta,
    eliminar_receta,
    estadisticas,
    formatear_receta,
    formatear_resumen,
    listar_recetas,
    proximas_a_expirar,
    recetas_activas,
    recetas_por_doctor,
    recetas_por_paciente,
    refrescar_estado,
)

NO_ENCONTRADA = 'Receta no encontrada'


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def recetas_list(request):
    if request.method == 'GET':
        return Response([formatear_receta(r) for r in listar_recetas()])
    s = RecetaCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    receta = crear_receta(s.validated_data)
    return Response(formatear_receta(receta), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def receta_detail(request, pk: str):
    receta = get_or_404(Receta, pk, NO_ENCONTRADA)
    if request.method == 'GET':
        return Response(formatear_receta(refrescar_estado(receta)))
    if request.method == 'PUT':
        s = RecetaUpdateSerializer(data=con_valores_actuales(formatear_receta(receta), request.data))
        s.is_valid(raise_exception=True)
        receta = actualizar_receta(receta, s.validated_data)
        return Response(formatear_receta(receta))
    # DELETE
    receta_id = str(receta.pk)
    eliminar_receta(receta)
    return Response({'message': 'Receta eliminada correctamente', 'id': receta_id})


@api_view(['GET'])
@permission_classes([AllowAny])
def receta_resumen(request, pk: str):
    receta = refrescar_estado(get_or_404(Receta, pk, NO_ENCONTRADA))
    return Response(formatear_resumen(receta))


@api_view(['GET'])
@permission_classes([AllowAny])
def recetas_paciente(request, paciente_id: str):
    return Response([formatear_receta(r) for r in recetas_por_paciente(paciente_id)])


@api_view(['GET'])
@permission_classes([AllowAny])
def recetas_doctor(request, doctor_nombre: str):
    return Response([formatear_receta(r) for r in recetas_por_doctor(doctor_nombre)])


@api_view(['GET'])
@permission_classes([AllowAny])
def recetas_activas_view(request):
    return Response([formatear_receta(r) for r in recetas_activas()])


@api_view(['GET'])
@permission_classes([AllowAny])
def recetas_proximas_a_expirar(request):
    q = ProximasAExpirarSerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = proximas_a_expirar(q.validated_data.get('dias'))
    return Response([formatear_receta(r) for r in qs])


@api_view(['GET'])
@permission_classes([AllowAny])
def recetas_estadisticas(request):
    return Response(estadisticas())
