import html

import bleach
from rest_framework import serializers

from consultorio.models import Paciente


def _clean(v):
    # drop every tag but keep the text as typed, without entity escaping
    return html.unescape(bleach.clean((v or '').strip(), tags=set(), strip=True)).strip()


def _con_alias(data):
    """Accept the field names the doctor pages send.

    ``condiciones`` stands for ``condicionesMedicas`` and ``medicamentos``
    (a list or a string) for ``medicamentosActuales``.
    """
    if not hasattr(data, 'get'):
        return data
    data = data.copy()
    if 'condicionesMedicas' not in data and 'condiciones' in data:
        data['condicionesMedicas'] = data.get('condiciones')
    condiciones = data.get('condicionesMedicas')
    if isinstance(condiciones, str):
        data['condicionesMedicas'] = [c.strip() for c in condiciones.split(',') if c.strip()]
    if 'medicamentosActuales' not in data and 'medicamentos' in data:
        meds = data.get('medicamentos')
        if isinstance(meds, (list, tuple)):
            meds = ', '.join(str(m).strip() for m in meds if str(m).strip())
        data['medicamentosActuales'] = meds or ''
    return data


class PacienteSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=100)
    apellido = serializers.CharField(max_length=100)
    edad = serializers.IntegerField(min_value=0, max_value=120)
    genero = serializers.ChoiceField(choices=Paciente.GENERO_CHOICES)
    telefono = serializers.RegexField(
        r'^[0-9\-]+$', max_length=30,
        error_messages={'invalid': 'El teléfono solo admite números y guiones'},
    )
    email = serializers.EmailField()
    direccion = serializers.CharField(max_length=255)
    condicionesMedicas = serializers.ListField(
        child=serializers.CharField(max_length=255), required=False
    )
    alergias = serializers.CharField(required=False, allow_blank=True)
    medicamentosActuales = serializers.CharField(required=False, allow_blank=True)

    def to_internal_value(self, data):
        return super().to_internal_value(_con_alias(data))

    def validate_nombre(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('El nombre no puede estar vacío')
        return v

    def validate_apellido(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('El apellido no puede estar vacío')
        return v

    def validate_direccion(self, v):
        return _clean(v)

    def validate_email(self, v):
        return v.strip().lower()


class PacienteUpdateSerializer(PacienteSerializer):
    """Update payload: the six core fields are mandatory, the rest optional."""
    direccion = serializers.CharField(max_length=255, required=False)

