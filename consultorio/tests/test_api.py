"""
Cross-cutting API behaviour: error envelope, health probe and the
receta back-reference cleanup when the database misbehaves.
"""
from datetime import timedelta
from unittest import mock

import pytest
from django.db import DatabaseError
from django.utils import timezone

from consultorio.models import Paciente, Receta
from consultorio.services.audit import log_action
from consultorio.services.recetas import eliminar_receta

pytestmark = pytest.mark.django_db


def test_healthz(client):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}


def test_error_envelope(client):
    r = client.get('/api/citas/not-a-uuid')
    assert r.status_code == 404
    assert r.data == {'ok': False, 'error': 'ID invalido', 'mensaje': 'ID invalido', 'code': 'invalid_id'}


def test_no_trailing_slash_routes(client):
    assert client.get('/api/pacientes/').status_code == 404
    assert client.get('/api/pacientes').status_code == 200


def test_receta_delete_survives_back_reference_failure(paciente, caplog):
    receta = Receta.objects.create(
        paciente=paciente, paciente_nombre='Luis', paciente_apellido='Pérez',
        paciente_edad=50, paciente_genero='Masculino',
        fecha_emision=timezone.now(), fecha_validez=timezone.now() + timedelta(days=5),
        diagnostico={'descripcion': 'Gripe'}, doctor_nombre='Dra. Ruiz',
    )
    paciente.recetas.add(receta)
    through = Paciente.recetas.through
    with mock.patch.object(through.objects, 'filter', side_effect=DatabaseError('boom')):
        eliminar_receta(receta)
    assert not Receta.objects.exists()
    assert 'no se pudo retirar la receta' in caplog.text


def test_audit_failure_is_logged_not_raised(caplog):
    with mock.patch('consultorio.services.audit.AuditEvent.objects.create', side_effect=DatabaseError('down')):
        assert log_action(user=None, action='login') is None
    assert 'audit event login could not be stored' in caplog.text
