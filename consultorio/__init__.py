"""Consultorio application for the clinica backend.

This package contains the models, serializers, services, views and route
registrations behind the pacientes, citas, recetas and diagnosticos API.
"""
