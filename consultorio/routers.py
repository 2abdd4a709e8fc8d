"""
URL mappings for the clinica API.

Paths mirror the ones the client pages call; trailing slashes are
omitted.  Fixed segments such as ``/api/citas/hoy`` are registered ahead
of the ``<pk>`` patterns of the same collection.
"""
from django.urls import include, path

from .auth_views import login_view, register_view, reset_password_view
from .views import citas, diagnosticos, health, pacientes, recetas, users

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    path('register', register_view, name='register_view'),
    path('login', login_view, name='login_view'),
    path('reset-password', reset_password_view, name='reset_password_view'),
    path('api/users', users.users_list, name='users_list'),

    path('api/pacientes', pacientes.pacientes_list, name='pacientes_list'),
    path('api/pacientes/email/<str:email>', pacientes.paciente_por_email, name='paciente_por_email'),
    path('api/pacientes/<str:pk>', pacientes.paciente_detail, name='paciente_detail'),
    path('api/doctor/add-paciente', pacientes.add_paciente, name='add_paciente'),

    path('api/citas', citas.citas_list, name='citas_list'),
    path('api/citas/hoy', citas.citas_hoy, name='citas_hoy'),
    path('api/citas/paciente/<str:paciente_id>', citas.citas_paciente, name='citas_paciente'),
    path('api/citas/fecha/<path:fecha>', citas.citas_fecha, name='citas_fecha'),
    path('api/citas/<str:pk>', citas.cita_detail, name='cita_detail'),

    path('api/recetas', recetas.recetas_list, name='recetas_list'),
    path('api/recetas/activas', recetas.recetas_activas_view, name='recetas_activas'),
    path('api/recetas/proximas-a-expirar', recetas.recetas_proximas_a_expirar, name='recetas_proximas_a_expirar'),
    path('api/recetas/estadisticas', recetas.recetas_estadisticas, name='recetas_estadisticas'),
    path('api/recetas/paciente/<str:paciente_id>', recetas.recetas_paciente, name='recetas_paciente'),
    path('api/recetas/doctor/<str:doctor_nombre>', recetas.recetas_doctor, name='recetas_doctor'),
    path('api/recetas/<str:pk>/resumen', recetas.receta_resumen, name='receta_resumen'),
    path('api/recetas/<str:pk>', recetas.receta_detail, name='receta_detail'),

    path('api/diagnosticos', diagnosticos.diagnosticos_list, name='diagnosticos_list'),
    path('api/diagnosticos/paciente/<str:paciente_id>', diagnosticos.diagnosticos_paciente,
         name='diagnosticos_paciente'),
    path('api/diagnosticos/<str:pk>', diagnosticos.diagnostico_detail, name='diagnostico_detail'),
]
