# apps/board/apps.py

from django.apps import AppConfig


class BoardConfig(AppConfig):
    """Configuração da app Board"""

    name = 'apps.board'
    verbose_name = 'Board - Relay Trello'

    def ready(self):
        """
        Inicialização da app
        Monta o container de serviços (cache, gateway, broadcaster)
        """
        from .services import configure_services

        services = configure_services()

        # Log de inicialização
        import logging
        logger = logging.getLogger(__name__)
        logger.info(
            f"🔌 Board App inicializada - cache TTL {services.cache.stats()['ttl_ms']}ms, "
            f"invalidação '{services.invalidator.scope}'"
        )
