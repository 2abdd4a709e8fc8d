import logging

from django.core.management.base import BaseCommand

from consultorio.services.recetas import reconciliar_recetas

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Rebuild every paciente's recetas set from the receta table (idempotent)."

    def handle(self, *args, **opts):
        added, removed = reconciliar_recetas()
        logger.info('reconcile_recetas: %d added, %d removed', added, removed)
        self.stdout.write(self.style.SUCCESS(f"ok: {added} added, {removed} removed"))
