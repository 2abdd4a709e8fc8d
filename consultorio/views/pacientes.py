"""
Paciente views.

Doctors create, edit and remove patient records here; the patient portal
resolves the logged-in patient through the by-email lookup.  Patients
created by either route start with ``registrado=False`` until the matching
account registers (see ``consultorio.services.cuentas``).
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.models import Paciente
from consultorio.serializers.paciente import PacienteSerializer, PacienteUpdateSerializer
from consultorio.services.ids import get_or_404
from consultorio.services.pacientes import (
    actualizar_paciente,
    crear_paciente,
    formatear_paciente,
    pacientes_qs,
)

NO_ENCONTRADO = 'Paciente no encontrado'


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def pacientes_list(request):
    if request.method == 'GET':
        return Response([formatear_paciente(p) for p in pacientes_qs()])
    s = PacienteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    paciente = crear_paciente(s.validated_data)
    return Response(
        {'mensaje': 'Paciente registrado', 'paciente': formatear_paciente(paciente)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([AllowAny])
def paciente_detail(request, pk: str):
    paciente = get_or_404(Paciente, pk, NO_ENCONTRADO, queryset=pacientes_qs())
    if request.method == 'GET':
        return Response(formatear_paciente(paciente))
    if request.method == 'PUT':
        s = PacienteUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        paciente = actualizar_paciente(paciente, s.validated_data)
        return Response({
            'mensaje': 'Paciente actualizado correctamente',
            'paciente': formatear_paciente(paciente),
        })
    # DELETE
    data = formatear_paciente(paciente)
    paciente.delete()
    return Response({'message': 'Paciente eliminado', 'paciente': data})


@api_view(['GET'])
@permission_classes([AllowAny])
def paciente_por_email(request, email: str):
    paciente = pacientes_qs().filter(email=email.strip().lower()).first()
    if paciente is None:
        raise NotFound(NO_ENCONTRADO)
    return Response(formatear_paciente(paciente))


@api_view(['POST'])
@permission_classes([AllowAny])
def add_paciente(request):
    """Doctor pre-registration of a patient ahead of account sign-up."""
    if not (request.data.get('email') or '').strip():
        raise ValidationError({'email': ['Se requiere email del paciente']})
    s = PacienteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    paciente = crear_paciente(s.validated_data, pre_registro=True)
    return Response(
        {'message': 'Paciente pre-registrado', 'paciente': formatear_paciente(paciente)},
        status=status.HTTP_201_CREATED,
    )
