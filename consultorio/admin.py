"""
Django admin registrations for the consultorio models.

Superusers can inspect and correct records through ``/admin/``; the
configuration is kept minimal.
"""

from django.contrib import admin

from .models import AuditEvent, Cita, Diagnostico, Paciente, Receta, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'nombre', 'rol', 'is_staff', 'is_superuser')
    list_filter = ('rol',)
    search_fields = ('email', 'nombre')


@admin.register(Paciente)
class PacienteAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'apellido', 'email', 'edad', 'genero', 'registrado')
    list_filter = ('registrado', 'genero')
    search_fields = ('nombre', 'apellido', 'email')


@admin.register(Cita)
class CitaAdmin(admin.ModelAdmin):
    list_display = ('paciente_nombre', 'paciente_apellido', 'fecha_cita', 'hora_cita', 'estado', 'doctor_nombre')
    list_filter = ('estado',)
    date_hierarchy = 'fecha_cita'


@admin.register(Receta)
class RecetaAdmin(admin.ModelAdmin):
    list_display = ('paciente_nombre', 'paciente_apellido', 'doctor_nombre', 'fecha_emision', 'fecha_validez', 'estado')
    list_filter = ('estado',)
    search_fields = ('doctor_nombre', 'paciente_nombre', 'paciente_apellido')


@admin.register(Diagnostico)
class DiagnosticoAdmin(admin.ModelAdmin):
    list_display = ('paciente_nombre', 'paciente_apellido', 'fecha', 'doctor_nombre')
    search_fields = ('diagnostico', 'doctor_nombre')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'object_type', 'object_id', 'user')
    list_filter = ('action', 'object_type')
    readonly_fields = ('created_at',)
