"""
Date helpers shared by the citas and recetas endpoints.

Calendar dates coming from the client pages are stored as UTC midnight
of that day, so the day shown back never shifts with the server's
local timezone.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime


def dia_utc(value) -> datetime:
    """Parse ``YYYY-MM-DD`` or ``D/M/Y`` into UTC midnight of that day.

    ISO datetimes are accepted too; only their date part is kept.
    Raises ``ValueError`` when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc)
    s = str(value or '').strip()
    if 'T' in s:
        s = s.split('T', 1)[0]
    if '-' in s:
        partes = s.split('-')
        y, m, d = (partes + ['', ''])[:3]
    elif '/' in s:
        partes = s.split('/')
        d, m, y = (partes + ['', ''])[:3]
    else:
        raise ValueError(f'fecha no reconocida: {value!r}')
    try:
        anio = int(y)
        dia = datetime(anio, int(m or 1), int(d or 1), tzinfo=dt_timezone.utc)
    except (TypeError, ValueError) as exc:
        raise ValueError(f'fecha no reconocida: {value!r}') from exc
    # two-digit years such as 10/03/25 are ambiguous
    if anio < 1000:
        raise ValueError(f'año de cuatro dígitos requerido: {value!r}')
    return dia


def fecha_hora(value) -> datetime:
    """Parse a date or an ISO datetime.

    A bare date becomes UTC midnight; a naive datetime is taken as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value or '').strip()
        dt = parse_datetime(s) if 'T' in s or ' ' in s else None
        if dt is None:
            return dia_utc(s)
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, dt_timezone.utc)
    # the API reports millisecond precision
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def intervalo_dia(value) -> tuple[datetime, datetime]:
    """Half-open UTC interval ``[day, day + 1)`` for the given date."""
    inicio = dia_utc(value)
    return inicio, inicio + timedelta(days=1)


def a_iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.astimezone(dt_timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
