from rest_framework import serializers

from consultorio.services.fechas import a_iso, dia_utc, fecha_hora


class FechaField(serializers.Field):
    """Date/datetime input field.

    With ``solo_dia=True`` the value is reduced to UTC midnight of the
    calendar day (``YYYY-MM-DD`` or ``D/M/Y``); otherwise full ISO
    datetimes are kept and bare dates become UTC midnight.
    """
    default_error_messages = {
        'invalid': 'Fecha inválida. Use YYYY-MM-DD o D/M/AAAA.',
    }

    def __init__(self, *, solo_dia: bool = False, **kwargs):
        self.solo_dia = solo_dia
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        try:
            return dia_utc(data) if self.solo_dia else fecha_hora(data)
        except (TypeError, ValueError):
            self.fail('invalid')

    def to_representation(self, value):
        return a_iso(value)


def con_valores_actuales(actual: dict, data) -> dict:
    """Overlay an update payload on the record's current representation.

    Update serializers validate the merged result, so a PUT may send only
    the fields it changes.
    """
    if hasattr(data, 'dict'):
        data = data.dict()
    return {**actual, **data}
