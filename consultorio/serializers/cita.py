from rest_framework import serializers

from consultorio.models import Cita
from consultorio.serializers.fields import FechaField


class CitaUpdateSerializer(serializers.Serializer):
    fechaCita = FechaField(solo_dia=True)
    horaCita = serializers.CharField(max_length=20)
    motivo = serializers.CharField(required=False, allow_blank=True)
    estado = serializers.ChoiceField(choices=Cita.ESTADO_CHOICES, required=False)
    doctorNombre = serializers.CharField(max_length=150, required=False, allow_blank=True)
    notas = serializers.CharField(required=False, allow_blank=True)


class CitaCreateSerializer(CitaUpdateSerializer):
    pacienteId = serializers.UUIDField()


class CitaFechaSerializer(serializers.Serializer):
    fecha = FechaField(solo_dia=True)
