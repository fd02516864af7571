# apps/board/broadcast.py

import logging
from typing import Any, Optional

from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

# Grupo único: todos os clientes conectados recebem todos os eventos
BOARD_EVENTS_GROUP = 'board_events'

# Canais publicados para os clientes
TASK_CREATED = 'taskCreated'
TASK_UPDATED = 'taskUpdated'
TASK_DELETED = 'taskDeleted'
BOARD_CREATED = 'boardCreated'
WEBHOOK_EVENT = 'webhookEvent'
TRELLO_EVENT = 'trelloEvent'


class EventBroadcaster:
    """
    Fan-out de eventos para os WebSockets conectados

    Publica no grupo do channel layer; cada BoardEventsConsumer entrega a
    mensagem ao seu cliente. Entrega best-effort: sem ack, sem retry e sem
    fila para quem estiver desconectado.
    """

    def __init__(self, group: str = BOARD_EVENTS_GROUP, layer_alias: str = 'default'):
        self.group = group
        self._layer_alias = layer_alias

    async def broadcast(self, channel: str, payload: Any) -> None:
        """
        Envia payload para todos os inscritos no canal informado
        Falhas do channel layer são registradas e não chegam ao chamador
        """
        channel_layer = self._channel_layer()
        if channel_layer is None:
            logger.warning(f"⚠️  Channel layer não configurado - evento {channel} descartado")
            return

        try:
            await channel_layer.group_send(
                self.group,
                {
                    'type': 'board.event',
                    'channel': channel,
                    'payload': payload,
                }
            )
        except Exception:
            logger.exception(f"❌ Erro ao publicar evento {channel}")
            return

        logger.debug(f"📣 Evento {channel} publicado no grupo {self.group}")

    def _channel_layer(self) -> Optional[Any]:
        return get_channel_layer(self._layer_alias)
