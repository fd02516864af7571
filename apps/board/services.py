# apps/board/services.py

"""
Container dos serviços do relay

Criado uma única vez no startup (BoardConfig.ready) e encerrado no
shutdown (lifespan ASGI). Views, consumers e comandos pegam as instâncias
via get_services() em vez de montar as suas.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.conf import settings

from .broadcast import EventBroadcaster
from .cache import SnapshotCache
from .gateway import MutationGateway
from .invalidation import CacheInvalidator
from .trello import TrelloClient

logger = logging.getLogger(__name__)


@dataclass
class RelayServices:
    cache: SnapshotCache
    invalidator: CacheInvalidator
    broadcaster: EventBroadcaster
    client: TrelloClient
    gateway: MutationGateway

    @classmethod
    def build(
        cls,
        cache: Optional[SnapshotCache] = None,
        client: Optional[TrelloClient] = None,
        broadcaster: Optional[EventBroadcaster] = None,
        invalidation_scope: Optional[str] = None,
    ) -> 'RelayServices':
        """
        Monta os serviços a partir do settings
        Qualquer peça pode ser substituída (útil em testes)
        """
        cache = cache or SnapshotCache(ttl=timedelta(milliseconds=settings.RELAY_CACHE_TTL_MS))
        client = client or TrelloClient(
            api_key=settings.TRELLO_API_KEY,
            api_token=settings.TRELLO_API_TOKEN,
            base_url=settings.TRELLO_API_BASE_URL,
            timeout=settings.TRELLO_TIMEOUT,
        )
        broadcaster = broadcaster or EventBroadcaster()
        invalidator = CacheInvalidator(cache, scope=invalidation_scope or settings.RELAY_INVALIDATION_SCOPE)
        gateway = MutationGateway(client, cache, invalidator, broadcaster)

        return cls(
            cache=cache,
            invalidator=invalidator,
            broadcaster=broadcaster,
            client=client,
            gateway=gateway,
        )

    def close(self) -> None:
        self.cache.close()


_services: Optional[RelayServices] = None


def configure_services(services: Optional[RelayServices] = None) -> RelayServices:
    """Instala (ou substitui) o container global"""
    global _services
    if _services is not None and _services is not services:
        _services.close()
    _services = services or RelayServices.build()
    return _services


def get_services() -> RelayServices:
    if _services is None:
        return configure_services()
    return _services


def shutdown_services() -> None:
    global _services
    if _services is not None:
        _services.close()
        _services = None
        logger.info("🛑 Serviços do relay encerrados")
