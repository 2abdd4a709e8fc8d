from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.models import Diagnostico
from consultorio.serializers.diagnostico import DiagnosticoCreateSerializer, DiagnosticoUpdateSerializer, con_alias
from consultorio.serializers.fields import con_valores_actuales
from consultorio.services.diagnosticos import (
    actualizar_diagnostico,
    crear_diagnostico,
    diagnosticos_por_paciente,
    formatear_diagnostico,
    listar_diagnosticos,
)
from consultorio.services.ids import get_or_404


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def diagnosticos_list(request):
    if request.method == 'GET':
        return Response([formatear_diagnostico(d) for d in listar_diagnosticos()])
    s = DiagnosticoCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    diag = crear_diagnostico(s.validated_data)
    return Response(formatear_diagnostico(diag), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def diagnostico_detail(request, pk: str):
    diag = get_or_404(Diagnostico, pk, 'Diagnostico no encontrado')
    if request.method == 'GET':
        return Response(formatear_diagnostico(diag))
    if request.method == 'PUT':
        datos = con_valores_actuales(formatear_diagnostico(diag), con_alias(request.data))
        s = DiagnosticoUpdateSerializer(data=datos)
        s.is_valid(raise_exception=True)
        diag = actualizar_diagnostico(diag, s.validated_data)
        return Response(formatear_diagnostico(diag))
    # DELETE
    diag_id = str(diag.pk)
    diag.delete()
    return Response({'message': 'Diagnostico eliminado correctamente', 'id': diag_id})


@api_view(['GET'])
@permission_classes([AllowAny])
def diagnosticos_paciente(request, paciente_id: str):
    return Response([formatear_diagnostico(d) for d in diagnosticos_por_paciente(paciente_id)])
