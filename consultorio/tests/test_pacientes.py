import uuid
from unittest import mock

import pytest
from django.db.models import QuerySet

from consultorio.exceptions import DuplicateRecord
from consultorio.models import Paciente, User
from consultorio.services.pacientes import crear_paciente

pytestmark = pytest.mark.django_db


def test_create_then_get_returns_same_fields(client, paciente_data):
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 201
    created = r.data['paciente']
    assert created['registrado'] is False
    assert created['recetas'] == []

    r = client.get(f"/api/pacientes/{created['_id']}")
    assert r.status_code == 200
    for key, value in paciente_data.items():
        assert r.data[key] == value


def test_create_requires_core_fields(client, paciente_data):
    del paciente_data['direccion']
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert r.data['code'] == 'validation_error'
    assert 'direccion' in r.data['fields']


@pytest.mark.parametrize('edad', [-1, 121])
def test_create_rejects_out_of_range_age(client, paciente_data, edad):
    paciente_data['edad'] = edad
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 400
    assert 'edad' in r.data['fields']


def test_create_rejects_bad_phone_and_gender(client, paciente_data):
    paciente_data['telefono'] = '555 12ab'
    paciente_data['genero'] = 'X'
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 400
    assert {'telefono', 'genero'} <= set(r.data['fields'])


def test_duplicate_email_is_rejected(client, paciente_data):
    assert client.post('/api/pacientes', paciente_data, format='json').status_code == 201
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'Paciente ya pre-registrado'
    assert r.data['code'] == 'duplicate'
    assert Paciente.objects.filter(email=paciente_data['email']).count() == 1


def test_create_rejects_email_of_existing_account(client, paciente_data):
    User.objects.create_user(username='ana@example.com', email='ana@example.com',
                             password='secreto1', nombre='Ana', rol='doctor')
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'El paciente ya fue registrado'


def test_client_aliases_are_accepted(client, paciente_data):
    del paciente_data['condicionesMedicas']
    del paciente_data['medicamentosActuales']
    paciente_data['condiciones'] = 'asma, diabetes'
    paciente_data['medicamentos'] = ['metformina', 'salbutamol']
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 201
    p = r.data['paciente']
    assert p['condicionesMedicas'] == ['asma', 'diabetes']
    assert p['medicamentosActuales'] == 'metformina, salbutamol'


def test_markup_is_stripped_from_names(client, paciente_data):
    paciente_data['nombre'] = '<b>Ana</b>'
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 201
    assert r.data['paciente']['nombre'] == 'Ana'


def test_ampersands_survive_the_round_trip(client, paciente_data):
    paciente_data['direccion'] = 'Calle 5 & 6, Col. Centro'
    paciente_data['apellido'] = 'Pérez & Hijos'
    paciente_data['nombre'] = '<em>Ana</em> <a href="#">María</a>'
    r = client.post('/api/pacientes', paciente_data, format='json')
    assert r.status_code == 201

    r = client.get(f"/api/pacientes/{r.data['paciente']['_id']}")
    assert r.data['direccion'] == 'Calle 5 & 6, Col. Centro'
    assert r.data['apellido'] == 'Pérez & Hijos'
    assert r.data['nombre'] == 'Ana María'


def test_update_rejects_email_of_existing_account(client, paciente):
    User.objects.create_user(username='doc@example.com', email='doc@example.com',
                             password='secreto1', nombre='Dra. Ruiz', rol='doctor')
    payload = {
        'nombre': 'Luis', 'apellido': 'Pérez', 'edad': 50, 'genero': 'Masculino',
        'telefono': '555-0000', 'email': 'doc@example.com',
    }
    r = client.put(f'/api/pacientes/{paciente.pk}', payload, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'duplicate'
    assert client.get('/api/pacientes/email/doc@example.com').status_code == 404


def test_update_keeps_email_of_own_account(client, paciente):
    user = User.objects.create_user(username='luis@example.com', email='luis@example.com',
                                    password='secreto1', nombre='Luis', rol='paciente')
    Paciente.objects.filter(pk=paciente.pk).update(registrado=True, user=user)
    payload = {
        'nombre': 'Luis', 'apellido': 'Pérez', 'edad': 51, 'genero': 'Masculino',
        'telefono': '555-0000', 'email': 'luis@example.com',
    }
    r = client.put(f'/api/pacientes/{paciente.pk}', payload, format='json')
    assert r.status_code == 200
    assert r.data['paciente']['edad'] == 51


def test_create_race_on_email_is_a_duplicate(paciente_data):
    crear_paciente(dict(paciente_data))
    # both existence checks pass, as for a request racing the first insert
    with mock.patch.object(QuerySet, 'exists', return_value=False):
        with pytest.raises(DuplicateRecord):
            crear_paciente(dict(paciente_data))
    assert Paciente.objects.filter(email=paciente_data['email']).count() == 1


def test_update_requires_all_core_fields(client, paciente):
    r = client.put(f'/api/pacientes/{paciente.pk}', {'nombre': 'Otro'}, format='json')
    assert r.status_code == 400
    paciente.refresh_from_db()
    assert paciente.nombre == 'Luis'


def test_update_rejects_email_of_other_paciente(client, paciente, paciente_data):
    client.post('/api/pacientes', paciente_data, format='json')
    payload = {
        'nombre': 'Luis', 'apellido': 'Pérez', 'edad': 51, 'genero': 'Masculino',
        'telefono': '555-0000', 'email': paciente_data['email'],
    }
    r = client.put(f'/api/pacientes/{paciente.pk}', payload, format='json')
    assert r.status_code == 400
    assert r.data['code'] == 'duplicate'


def test_round_trip(client, paciente_data):
    r = client.post('/api/pacientes', paciente_data, format='json')
    pid = r.data['paciente']['_id']

    update = {k: paciente_data[k] for k in ('nombre', 'apellido', 'genero', 'telefono', 'email')}
    update['edad'] = 35
    r = client.put(f'/api/pacientes/{pid}', update, format='json')
    assert r.status_code == 200
    assert r.data['mensaje'] == 'Paciente actualizado correctamente'

    r = client.get(f'/api/pacientes/{pid}')
    assert r.data['edad'] == 35
    assert r.data['direccion'] == paciente_data['direccion']

    r = client.delete(f'/api/pacientes/{pid}')
    assert r.status_code == 200
    assert r.data['message'] == 'Paciente eliminado'
    assert r.data['paciente']['_id'] == pid

    r = client.get(f'/api/pacientes/{pid}')
    assert r.status_code == 404


def test_delete_distinguishes_malformed_and_missing_ids(client):
    r = client.delete('/api/pacientes/not-an-id')
    assert r.status_code == 404
    assert r.data['error'] == 'ID invalido'
    assert r.data['code'] == 'invalid_id'

    r = client.delete(f'/api/pacientes/{uuid.uuid4()}')
    assert r.status_code == 404
    assert r.data['error'] == 'Paciente no encontrado'
    assert r.data['code'] == 'not_found'


def test_lookup_by_email(client, paciente):
    r = client.get('/api/pacientes/email/luis@example.com')
    assert r.status_code == 200
    assert r.data['_id'] == str(paciente.pk)

    r = client.get('/api/pacientes/email/nadie@example.com')
    assert r.status_code == 404


def test_list_is_ordered_by_creation(client, paciente, paciente_data):
    client.post('/api/pacientes', paciente_data, format='json')
    r = client.get('/api/pacientes')
    assert r.status_code == 200
    assert [p['email'] for p in r.data] == ['luis@example.com', 'ana@example.com']


def test_doctor_pre_registration(client, paciente_data):
    r = client.post('/api/doctor/add-paciente', paciente_data, format='json')
    assert r.status_code == 201
    assert r.data['message'] == 'Paciente pre-registrado'
    assert r.data['paciente']['registrado'] is False

    r = client.post('/api/doctor/add-paciente', paciente_data, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'Paciente ya pre-registrado'


def test_pre_registration_requires_email(client, paciente_data):
    del paciente_data['email']
    r = client.post('/api/doctor/add-paciente', paciente_data, format='json')
    assert r.status_code == 400
    assert r.data['fields']['email'] == ['Se requiere email del paciente']
