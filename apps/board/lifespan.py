# apps/board/lifespan.py

import logging

from django.conf import settings

from .services import get_services, shutdown_services

logger = logging.getLogger(__name__)


class RelayLifespan:
    """
    Aplicação ASGI para o protocolo lifespan

    - startup: aquece os boards de RELAY_WARM_BOARDS
    - shutdown: encerra os serviços (descarta o cache)
    """

    async def __call__(self, scope, receive, send):
        while True:
            message = await receive()

            if message['type'] == 'lifespan.startup':
                boards = list(settings.RELAY_WARM_BOARDS)
                if boards:
                    await get_services().gateway.warm(boards)
                await send({'type': 'lifespan.startup.complete'})

            elif message['type'] == 'lifespan.shutdown':
                shutdown_services()
                await send({'type': 'lifespan.shutdown.complete'})
                return
