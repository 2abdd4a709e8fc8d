import uuid
from datetime import datetime, timezone as dt_timezone

import pytest
from django.test import override_settings
from django.utils import timezone

from consultorio.models import Cita

pytestmark = pytest.mark.django_db


def cita_payload(paciente, **overrides):
    payload = {
        'pacienteId': str(paciente.pk),
        'fechaCita': '2025-03-10',
        'horaCita': '10:30',
        'motivo': 'Control',
        'doctorNombre': 'Dra. Ruiz',
    }
    payload.update(overrides)
    return payload


@pytest.mark.parametrize('tz', ['UTC', 'America/Mexico_City', 'Asia/Tokyo'])
@pytest.mark.parametrize('fecha', ['2025-03-10', '10/03/2025', '2025-03-10T23:30:00-06:00'])
def test_fecha_cita_is_utc_midnight_of_the_day(client, paciente, tz, fecha):
    with override_settings(TIME_ZONE=tz):
        r = client.post('/api/citas', cita_payload(paciente, fechaCita=fecha), format='json')
    assert r.status_code == 201
    assert r.data['fechaCita'] == '2025-03-10T00:00:00.000Z'
    cita = Cita.objects.get(pk=r.data['_id'])
    assert cita.fecha_cita == datetime(2025, 3, 10, tzinfo=dt_timezone.utc)


def test_create_copies_patient_snapshot(client, paciente):
    r = client.post('/api/citas', cita_payload(paciente), format='json')
    assert r.status_code == 201
    assert r.data['pacienteNombre'] == 'Luis'
    assert r.data['pacienteApellido'] == 'Pérez'
    assert r.data['pacienteEdad'] == 50
    assert r.data['pacienteGenero'] == 'Masculino'
    assert r.data['pacienteEmail'] == 'luis@example.com'
    assert r.data['estado'] == 'programada'


def test_snapshot_is_kept_after_patient_changes(client, paciente):
    r = client.post('/api/citas', cita_payload(paciente), format='json')
    paciente.nombre = 'Luis Alberto'
    paciente.save()
    r = client.put(f"/api/citas/{r.data['_id']}", {'pacienteNombre': 'Otro', 'motivo': 'Revisión'}, format='json')
    assert r.status_code == 200
    assert r.data['pacienteNombre'] == 'Luis'
    assert r.data['motivo'] == 'Revisión'


def test_create_validation(client, paciente):
    r = client.post('/api/citas', cita_payload(paciente, fechaCita='mañana'), format='json')
    assert r.status_code == 400
    assert 'fechaCita' in r.data['fields']

    r = client.post('/api/citas', cita_payload(paciente, pacienteId=str(uuid.uuid4())), format='json')
    assert r.status_code == 400
    assert r.data['fields']['pacienteId'] == ['Paciente no encontrado']

    r = client.post('/api/citas', cita_payload(paciente, estado='perdida'), format='json')
    assert r.status_code == 400


def test_round_trip(client, paciente):
    r = client.post('/api/citas', cita_payload(paciente), format='json')
    cid = r.data['_id']

    r = client.get(f'/api/citas/{cid}')
    assert r.status_code == 200
    assert r.data['horaCita'] == '10:30'

    r = client.put(f'/api/citas/{cid}', {'estado': 'reprogramada', 'fechaCita': '12/03/2025'}, format='json')
    assert r.status_code == 200
    r = client.get(f'/api/citas/{cid}')
    assert r.data['estado'] == 'reprogramada'
    assert r.data['fechaCita'] == '2025-03-12T00:00:00.000Z'
    assert r.data['horaCita'] == '10:30'

    r = client.delete(f'/api/citas/{cid}')
    assert r.status_code == 200
    assert r.data == {'message': 'Cita eliminada correctamente', 'id': cid}
    assert client.get(f'/api/citas/{cid}').status_code == 404


def test_by_date_matches_the_utc_day(client, paciente):
    for fecha, hora in [('2025-03-09', '09:00'), ('2025-03-10', '16:00'),
                        ('2025-03-10', '08:15'), ('2025-03-11', '07:00')]:
        client.post('/api/citas', cita_payload(paciente, fechaCita=fecha, horaCita=hora), format='json')
    # stored just before the next day starts, bypassing normalisation
    Cita.objects.create(
        paciente=paciente, paciente_nombre='Luis', paciente_apellido='Pérez', paciente_edad=50,
        paciente_genero='Masculino', paciente_email='luis@example.com',
        fecha_cita=datetime(2025, 3, 10, 23, 59, 59, tzinfo=dt_timezone.utc), hora_cita='23:59',
    )

    r = client.get('/api/citas/fecha/2025-03-10')
    assert r.status_code == 200
    assert [c['horaCita'] for c in r.data] == ['08:15', '16:00', '23:59']

    r = client.get('/api/citas/fecha/10/03/2025')
    assert len(r.data) == 3


def test_by_date_rejects_garbage(client):
    r = client.get('/api/citas/fecha/ayer')
    assert r.status_code == 400
    assert r.data['code'] == 'validation_error'


def test_by_patient_and_list_order(client, paciente):
    client.post('/api/citas', cita_payload(paciente, fechaCita='2025-03-12', horaCita='09:00'), format='json')
    client.post('/api/citas', cita_payload(paciente, fechaCita='2025-03-10', horaCita='11:00'), format='json')
    client.post('/api/citas', cita_payload(paciente, fechaCita='2025-03-10', horaCita='09:00'), format='json')

    r = client.get('/api/citas')
    assert [(c['fechaCita'][:10], c['horaCita']) for c in r.data] == [
        ('2025-03-10', '09:00'), ('2025-03-10', '11:00'), ('2025-03-12', '09:00'),
    ]

    r = client.get(f'/api/citas/paciente/{paciente.pk}')
    assert [c['fechaCita'][:10] for c in r.data] == ['2025-03-10', '2025-03-10', '2025-03-12']

    assert client.get('/api/citas/paciente/no-es-id').data == []


def test_today(client, paciente):
    hoy = timezone.now().strftime('%Y-%m-%d')
    client.post('/api/citas', cita_payload(paciente, fechaCita=hoy), format='json')
    client.post('/api/citas', cita_payload(paciente, fechaCita='2001-01-01'), format='json')
    r = client.get('/api/citas/hoy')
    assert r.status_code == 200
    assert [c['fechaCita'][:10] for c in r.data] == [hoy]


def test_unknown_id_is_404(client):
    assert client.get(f'/api/citas/{uuid.uuid4()}').status_code == 404
    r = client.delete('/api/citas/xyz')
    assert r.status_code == 404
    assert r.data['code'] == 'invalid_id'


@pytest.mark.parametrize('fecha', ['10/03/25', '25-03-10'])
def test_two_digit_years_are_rejected(client, paciente, fecha):
    r = client.post('/api/citas', cita_payload(paciente, fechaCita=fecha), format='json')
    assert r.status_code == 400
    assert 'fechaCita' in r.data['fields']
    assert not Cita.objects.exists()
