# apps/board/consumers.py

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.utils import timezone

from .broadcast import BOARD_EVENTS_GROUP

logger = logging.getLogger(__name__)


class BoardEventsConsumer(AsyncJsonWebsocketConsumer):
    """
    Consumer WebSocket que recebe os eventos do relay

    Funcionalidades:
    - Eventos das próprias escritas (taskCreated, taskUpdated, ...)
    - Webhooks do Trello, crus e normalizados
    - Heartbeat ping/pong

    Não há estado por cliente: entra no grupo ao conectar e sai ao
    desconectar.
    """

    group_name = BOARD_EVENTS_GROUP

    async def connect(self):
        await self.channel_layer.group_add(
            self.group_name,
            self.channel_name
        )
        await self.accept()

        logger.info(f"✅ WebSocket conectado - {self.channel_name}")

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(
            self.group_name,
            self.channel_name
        )

        logger.info(f"🔌 WebSocket desconectado - {self.channel_name} (code={close_code})")

    async def receive_json(self, content, **kwargs):
        """
        Mensagens do cliente: apenas heartbeat
        """
        if isinstance(content, dict) and content.get('type') == 'ping':
            await self.send_json({
                'type': 'pong',
                'timestamp': timezone.now().isoformat()
            })

    async def board_event(self, event):
        """
        Repassa um evento publicado pelo EventBroadcaster
        """
        await self.send_json({
            'type': event['channel'],
            'payload': event['payload']
        })
