"""
Database models for the clinica backend.

These models capture the records handled by the doctor and patient
pages: user accounts, patients (pacientes), appointments (citas),
prescriptions (recetas) and diagnoses (diagnosticos).  Every record is
keyed by a generated UUID which the API exposes as ``_id``.

Citas, recetas and diagnosticos keep a snapshot of the patient's
identity fields taken when they are created, so a later change to the
patient record does not rewrite clinical history.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, RegexValidator
from django.db import models
from django.utils import timezone


class User(AbstractUser):
    """Login-capable account.

    The email doubles as the username.  A ``paciente`` account is linked
    to the :class:`Paciente` record a doctor pre-registered with the
    same email.
    """
    ROL_DOCTOR = 'doctor'
    ROL_PACIENTE = 'paciente'
    ROL_CHOICES = [
        (ROL_DOCTOR, 'Doctor'),
        (ROL_PACIENTE, 'Paciente'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    nombre = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    rol = models.CharField(max_length=10, choices=ROL_CHOICES)
    # [{fecha, descripcion}]
    historial = models.JSONField(default=list, blank=True)
    # [{nombre, dosis}]
    medicina = models.JSONField(default=list, blank=True)

    def __str__(self) -> str:
        return f"{self.email} ({self.rol})"


class Paciente(models.Model):
    """Patient master record and root of the patient's clinical history."""
    GENERO_CHOICES = [
        ('Masculino', 'Masculino'),
        ('Femenino', 'Femenino'),
        ('Otro', 'Otro'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    nombre = models.CharField(max_length=100)
    apellido = models.CharField(max_length=100)
    edad = models.PositiveSmallIntegerField(validators=[MaxValueValidator(120)])
    genero = models.CharField(max_length=10, choices=GENERO_CHOICES)
    telefono = models.CharField(
        max_length=30,
        validators=[RegexValidator(r'^[0-9\-]+$', 'Solo números y guiones')],
    )
    email = models.EmailField(unique=True)
    direccion = models.CharField(max_length=255)
    condiciones_medicas = models.JSONField(default=list, blank=True)
    alergias = models.TextField(blank=True, default='')
    medicamentos_actuales = models.TextField(blank=True, default='')
    # True once the patient created their own account
    registrado = models.BooleanField(default=False)
    user = models.OneToOneField(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='paciente'
    )
    recetas = models.ManyToManyField('Receta', blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.nombre} {self.apellido} <{self.email}>"


class Cita(models.Model):
    ESTADO_PROGRAMADA = 'programada'
    ESTADO_CHOICES = [
        ('programada', 'Programada'),
        ('completada', 'Completada'),
        ('cancelada', 'Cancelada'),
        ('reprogramada', 'Reprogramada'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    paciente = models.ForeignKey(Paciente, on_delete=models.CASCADE, related_name='citas')
    paciente_nombre = models.CharField(max_length=100)
    paciente_apellido = models.CharField(max_length=100)
    paciente_edad = models.PositiveSmallIntegerField()
    paciente_genero = models.CharField(max_length=10)
    paciente_email = models.EmailField()
    # UTC midnight of the calendar day
    fecha_cita = models.DateTimeField(db_index=True)
    hora_cita = models.CharField(max_length=20)
    motivo = models.TextField(blank=True, default='')
    estado = models.CharField(max_length=15, choices=ESTADO_CHOICES, default=ESTADO_PROGRAMADA)
    doctor_nombre = models.CharField(max_length=150, blank=True, default='')
    notas = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.paciente_nombre} {self.fecha_cita:%Y-%m-%d} {self.hora_cita}"


class Diagnostico(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    paciente = models.ForeignKey(Paciente, on_delete=models.CASCADE, related_name='diagnosticos')
    paciente_nombre = models.CharField(max_length=100)
    paciente_apellido = models.CharField(max_length=100)
    fecha = models.DateTimeField(default=timezone.now)
    diagnostico = models.TextField()
    tratamiento = models.TextField(blank=True, default='')
    observaciones = models.TextField(blank=True, default='')
    doctor_nombre = models.CharField(max_length=150)
    notas_medico = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.diagnostico[:40]} ({self.paciente_nombre})"


class Receta(models.Model):
    """Prescription with an embedded diagnosis summary and medication list.

    ``estado`` moves from ``activa`` to ``expirada`` once ``fecha_validez``
    has passed.  The transition is applied when the receta is saved with a
    new validity date and when it is read (see :meth:`marcar_como_expirada`);
    nothing flips it in the background.
    """
    ESTADO_ACTIVA = 'activa'
    ESTADO_EXPIRADA = 'expirada'
    ESTADO_CANCELADA = 'cancelada'
    ESTADO_CHOICES = [
        (ESTADO_ACTIVA, 'Activa'),
        (ESTADO_EXPIRADA, 'Expirada'),
        (ESTADO_CANCELADA, 'Cancelada'),
    ]
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    paciente = models.ForeignKey(Paciente, on_delete=models.CASCADE, related_name='historial_recetas')
    paciente_nombre = models.CharField(max_length=100)
    paciente_apellido = models.CharField(max_length=100)
    paciente_edad = models.PositiveSmallIntegerField()
    paciente_genero = models.CharField(max_length=10)
    fecha_emision = models.DateTimeField()
    fecha_validez = models.DateTimeField(db_index=True)
    # {codigoCIE10, descripcion, hallazgosClinicos}
    diagnostico = models.JSONField(default=dict)
    diagnostico_ref = models.ForeignKey(
        Diagnostico, null=True, blank=True, on_delete=models.SET_NULL, related_name='recetas'
    )
    # [{nombre, dosis, frecuencia, duracion, instruccionesEspeciales}]
    medicamentos = models.JSONField(default=list)
    instrucciones_generales = models.TextField(blank=True, default='')
    notas_medico = models.TextField(blank=True, default='')
    doctor_nombre = models.CharField(max_length=150, db_index=True)
    estado = models.CharField(max_length=10, choices=ESTADO_CHOICES, default=ESTADO_ACTIVA, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._fecha_validez_cargada = instance.__dict__.get('fecha_validez')
        return instance

    def save(self, *args, **kwargs):
        # A past validity date wins over whatever estado the caller set.
        cambio_validez = self._state.adding or (
            self.fecha_validez != getattr(self, '_fecha_validez_cargada', None)
        )
        if cambio_validez and self.fecha_validez and self.fecha_validez < timezone.now():
            self.estado = self.ESTADO_EXPIRADA
            update_fields = kwargs.get('update_fields')
            if update_fields is not None and 'estado' not in update_fields:
                kwargs['update_fields'] = [*update_fields, 'estado']
        super().save(*args, **kwargs)
        self._fecha_validez_cargada = self.fecha_validez

    def esta_activa(self) -> bool:
        return self.estado == self.ESTADO_ACTIVA and self.fecha_validez >= timezone.now()

    def marcar_como_expirada(self) -> bool:
        """Flip an ``activa`` receta past its validity date; True if changed."""
        if self.estado == self.ESTADO_ACTIVA and self.fecha_validez < timezone.now():
            self.estado = self.ESTADO_EXPIRADA
            return True
        return False

    def medicamentos_formateados(self) -> list[dict]:
        lineas = []
        for med in self.medicamentos or []:
            duracion = med.get('duracion')
            lineas.append({
                'medicamento': f"{med.get('nombre', '')} {med.get('dosis', '')}".strip(),
                'frecuencia': med.get('frecuencia', ''),
                'duracion': f"{duracion} días" if duracion else 'No especificada',
                'instrucciones': med.get('instruccionesEspeciales') or 'Ninguna',
            })
        return lineas

    def resumen(self) -> dict:
        return {
            'paciente': f"{self.paciente_nombre} {self.paciente_apellido}",
            'edad': self.paciente_edad,
            'genero': self.paciente_genero,
            'fechaEmision': self.fecha_emision,
            'fechaValidez': self.fecha_validez,
            'diagnostico': (self.diagnostico or {}).get('descripcion', ''),
            'cantidadMedicamentos': len(self.medicamentos or []),
            'estado': self.estado,
            'doctor': self.doctor_nombre,
        }

    def __str__(self) -> str:
        return f"Receta {self.paciente_nombre} {self.fecha_emision:%Y-%m-%d} ({self.estado})"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
