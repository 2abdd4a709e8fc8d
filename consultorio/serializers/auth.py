from rest_framework import serializers

from consultorio.models import User


class HistorialEntradaSerializer(serializers.Serializer):
    fecha = serializers.CharField(required=False, allow_blank=True, default='')
    descripcion = serializers.CharField(required=False, allow_blank=True, default='')


class MedicinaEntradaSerializer(serializers.Serializer):
    nombre = serializers.CharField(required=False, allow_blank=True, default='')
    dosis = serializers.CharField(required=False, allow_blank=True, default='')


class RegisterSerializer(serializers.Serializer):
    nombre = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    rol = serializers.ChoiceField(choices=User.ROL_CHOICES)
    historial = HistorialEntradaSerializer(many=True, required=False)
    medicina = MedicinaEntradaSerializer(many=True, required=False)

    def validate_nombre(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('El nombre no puede estar vacío')
        return v

    def validate_email(self, v):
        return v.strip().lower()


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()

    def validate_email(self, v):
        return v.strip().lower()

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('La contraseña no puede estar vacía')
        return v


class ResetPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()
    newPassword = serializers.CharField(write_only=True)

    def validate_email(self, v):
        return v.strip().lower()
