"""Record identifier helpers."""
from __future__ import annotations

import uuid
from typing import Optional, Type, TypeVar

from django.db import models
from rest_framework.exceptions import NotFound

from consultorio.exceptions import InvalidIdentifier

M = TypeVar('M', bound=models.Model)


def uuid_o_none(value) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def get_or_404(model: Type[M], pk, mensaje: str, queryset=None) -> M:
    """Fetch a record by identifier.

    A malformed identifier raises ``InvalidIdentifier`` (code
    ``invalid_id``); a well-formed one with no record raises ``NotFound``
    (code ``not_found``).  Both map to 404.
    """
    key = uuid_o_none(pk)
    if key is None:
        raise InvalidIdentifier()
    qs = queryset if queryset is not None else model.objects.all()
    obj = qs.filter(pk=key).first()
    if obj is None:
        raise NotFound(mensaje)
    return obj
