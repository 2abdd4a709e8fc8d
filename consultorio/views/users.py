from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from consultorio.models import User
from consultorio.services.cuentas import formatear_usuario_completo


@api_view(['GET'])
@permission_classes([AllowAny])
def users_list(request):
    """List accounts; password hashes never leave the server."""
    qs = User.objects.filter(is_superuser=False).order_by('date_joined')
    return Response([formatear_usuario_completo(u) for u in qs])
