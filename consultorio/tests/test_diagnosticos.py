import uuid

import pytest

pytestmark = pytest.mark.django_db


def diag_payload(paciente, **overrides):
    payload = {
        'pacienteId': str(paciente.pk),
        'diagnostico': 'Hipertensión arterial',
        'tratamiento': 'Losartán 50mg',
        'doctorNombre': 'Dra. Ruiz',
    }
    payload.update(overrides)
    return payload


def test_round_trip(client, paciente):
    r = client.post('/api/diagnosticos', diag_payload(paciente), format='json')
    assert r.status_code == 201
    did = r.data['_id']
    assert r.data['pacienteNombre'] == 'Luis'
    assert r.data['pacienteApellido'] == 'Pérez'
    assert r.data['fecha'] is not None

    r = client.put(f'/api/diagnosticos/{did}', {'observaciones': 'Control en 1 mes'}, format='json')
    assert r.status_code == 200
    r = client.get(f'/api/diagnosticos/{did}')
    assert r.data['observaciones'] == 'Control en 1 mes'
    assert r.data['diagnostico'] == 'Hipertensión arterial'

    r = client.delete(f'/api/diagnosticos/{did}')
    assert r.status_code == 200
    assert client.get(f'/api/diagnosticos/{did}').status_code == 404


@pytest.mark.parametrize('missing', ['diagnostico', 'doctorNombre', 'pacienteId'])
def test_required_fields(client, paciente, missing):
    payload = diag_payload(paciente)
    del payload[missing]
    r = client.post('/api/diagnosticos', payload, format='json')
    assert r.status_code == 400
    assert missing in r.data['fields']


def test_form_aliases(client, paciente):
    payload = diag_payload(paciente, planTratamiento='Dieta baja en sodio', fechaDiagnostico='2025-01-15')
    del payload['diagnostico']
    del payload['tratamiento']
    payload['descripcion'] = 'Hipertensión'
    r = client.post('/api/diagnosticos', payload, format='json')
    assert r.status_code == 201
    assert r.data['diagnostico'] == 'Hipertensión'
    assert r.data['tratamiento'] == 'Dieta baja en sodio'
    assert r.data['fecha'] == '2025-01-15T00:00:00.000Z'


def test_by_patient_newest_first(client, paciente):
    client.post('/api/diagnosticos', diag_payload(paciente, fecha='2024-05-01', diagnostico='A'), format='json')
    client.post('/api/diagnosticos', diag_payload(paciente, fecha='2025-05-01', diagnostico='B'), format='json')
    r = client.get(f'/api/diagnosticos/paciente/{paciente.pk}')
    assert [d['diagnostico'] for d in r.data] == ['B', 'A']
    assert client.get(f'/api/diagnosticos/paciente/{uuid.uuid4()}').data == []


def test_unknown_patient_is_rejected(client, paciente):
    r = client.post('/api/diagnosticos', diag_payload(paciente, pacienteId=str(uuid.uuid4())), format='json')
    assert r.status_code == 400


def test_update_accepts_form_aliases(client, paciente):
    r = client.post('/api/diagnosticos',
                    diag_payload(paciente, diagnostico='gripe', tratamiento='reposo'), format='json')
    did = r.data['_id']
    r = client.put(f'/api/diagnosticos/{did}',
                   {'descripcion': 'covid', 'planTratamiento': 'aislamiento'}, format='json')
    assert r.status_code == 200
    r = client.get(f'/api/diagnosticos/{did}')
    assert r.data['diagnostico'] == 'covid'
    assert r.data['tratamiento'] == 'aislamiento'
    assert r.data['doctorNombre'] == 'Dra. Ruiz'
