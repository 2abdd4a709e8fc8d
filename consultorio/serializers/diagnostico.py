from rest_framework import serializers

from consultorio.serializers.fields import FechaField


def con_alias(data):
    # the prescription form posts "descripcion"/"planTratamiento"
    if not hasattr(data, 'get'):
        return data
    data = data.copy()
    if not data.get('diagnostico') and data.get('descripcion'):
        data['diagnostico'] = data.get('descripcion')
    if 'tratamiento' not in data and 'planTratamiento' in data:
        data['tratamiento'] = data.get('planTratamiento')
    if 'fecha' not in data and data.get('fechaDiagnostico'):
        data['fecha'] = data.get('fechaDiagnostico')
    return data


class DiagnosticoUpdateSerializer(serializers.Serializer):
    fecha = FechaField(required=False)
    diagnostico = serializers.CharField()
    tratamiento = serializers.CharField(required=False, allow_blank=True)
    observaciones = serializers.CharField(required=False, allow_blank=True)
    doctorNombre = serializers.CharField(max_length=150)
    notasMedico = serializers.CharField(required=False, allow_blank=True)

    def to_internal_value(self, data):
        return super().to_internal_value(con_alias(data))


class DiagnosticoCreateSerializer(DiagnosticoUpdateSerializer):
    pacienteId = serializers.UUIDField()
