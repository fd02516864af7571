# config/asgi.py

import os
from django.core.asgi import get_asgi_application
from channels.routing import ProtocolTypeRouter, URLRouter

# Configurar Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

# Importar rotas de WebSocket depois de configurar Django
django_asgi_app = get_asgi_application()

from apps.board.lifespan import RelayLifespan
from apps.board.routing import websocket_urlpatterns

# Configuração ASGI
application = ProtocolTypeRouter({
    # HTTP tradicional
    "http": django_asgi_app,

    # WebSocket sem autenticação (eventos públicos do board)
    "websocket": URLRouter(websocket_urlpatterns),

    # Startup/shutdown do servidor (aquecimento do cache)
    "lifespan": RelayLifespan(),
})
