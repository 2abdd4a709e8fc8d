import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from consultorio.models import Paciente


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttling history lives in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def paciente_data():
    return {
        'nombre': 'Ana',
        'apellido': 'López',
        'edad': 34,
        'genero': 'Femenino',
        'telefono': '555-123-4567',
        'email': 'ana@example.com',
        'direccion': 'Av. Juárez 10',
        'condicionesMedicas': ['asma'],
        'alergias': 'penicilina',
        'medicamentosActuales': 'salbutamol',
    }


@pytest.fixture
def paciente(db):
    return Paciente.objects.create(
        nombre='Luis',
        apellido='Pérez',
        edad=50,
        genero='Masculino',
        telefono='555-0000',
        email='luis@example.com',
        direccion='Calle 5',
    )
