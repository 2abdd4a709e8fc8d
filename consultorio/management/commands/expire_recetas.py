import logging

from django.core.management.base import BaseCommand

from consultorio.services.recetas import expirar_vencidas

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Mark activa recetas past their fechaValidez as expirada."

    def handle(self, *args, **opts):
        n = expirar_vencidas()
        logger.info('expire_recetas: %d recetas expiradas', n)
        self.stdout.write(self.style.SUCCESS(f"ok: {n} expiradas"))
