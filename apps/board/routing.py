# apps/board/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket para a aplicação board
websocket_urlpatterns = [
    # Eventos do relay - todos os clientes recebem tudo
    re_path(r'ws/board/$', consumers.BoardEventsConsumer.as_asgi()),
]
