from rest_framework import serializers

from consultorio.models import Receta
from consultorio.serializers.fields import FechaField


class DiagnosticoResumenSerializer(serializers.Serializer):
    codigoCIE10 = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    descripcion = serializers.CharField()
    hallazgosClinicos = serializers.CharField(required=False, allow_blank=True, default='')

    def to_internal_value(self, data):
        # the prescription form sends the ICD-10 code as "Diagnostico"
        if hasattr(data, 'get') and 'codigoCIE10' not in data and 'Diagnostico' in data:
            data = {**data, 'codigoCIE10': data.get('Diagnostico') or ''}
        return super().to_internal_value(data)


class MedicamentoSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=150)
    dosis = serializers.CharField(max_length=100)
    frecuencia = serializers.CharField(max_length=100)
    duracion = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    instruccionesEspeciales = serializers.CharField(required=False, allow_blank=True, default='')


class RecetaUpdateSerializer(serializers.Serializer):
    fechaEmision = FechaField()
    fechaValidez = FechaField()
    diagnostico = DiagnosticoResumenSerializer()
    diagnosticoId = serializers.UUIDField(required=False, allow_null=True)
    medicamentos = MedicamentoSerializer(many=True, allow_empty=False)
    instruccionesGenerales = serializers.CharField(required=False, allow_blank=True)
    notasMedico = serializers.CharField(required=False, allow_blank=True)
    doctorNombre = serializers.CharField(max_length=150)
    estado = serializers.ChoiceField(choices=Receta.ESTADO_CHOICES, required=False)


class RecetaCreateSerializer(RecetaUpdateSerializer):
    pacienteId = serializers.UUIDField()


class ProximasAExpirarSerializer(serializers.Serializer):
    dias = serializers.IntegerField(min_value=0, max_value=365, required=False)
