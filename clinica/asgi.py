"""
ASGI config for clinica project.

HTTP only; the API has no WebSocket routes.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinica.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
