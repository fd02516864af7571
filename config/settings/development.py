# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === APPS ADICIONAIS PARA DEV ===

# django_extensions (shell_plus, show_urls) apenas se disponível
try:
    import django_extensions

    INSTALLED_APPS += ['django_extensions']
except ImportError:
    pass

# === LOGGING MAIS VERBOSO ===

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

LOGGING['loggers']['httpx'] = {
    'handlers': ['console'],
    'level': 'INFO',
    'propagate': False,
}

# === CONFIGURAÇÕES DE DESENVOLVIMENTO ===

# Channels simplificado para desenvolvimento
CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# Usar Redis para o channel layer se disponível
if env('REDIS_URL', default=None):
    try:
        import redis

        # Testar conexão Redis
        r = redis.from_url(env('REDIS_URL'))
        r.ping()

        CHANNEL_LAYERS['default'] = {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {
                'hosts': [env('REDIS_URL')],
            },
        }
        print("🔴 Redis conectado com sucesso!")
    except Exception as e:
        print(f"⚠️  Redis não disponível: {e}")
        print("📝 Usando channel layer em memória local")

# Configurações mais relaxadas para desenvolvimento
CORS_ALLOW_ALL_ORIGINS = True
CSRF_COOKIE_SECURE = False

# Configurações do shell_plus
SHELL_PLUS_IMPORTS = [
    'from apps.board.services import get_services',
    'from apps.board.normalizer import normalize_action',
]

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
print(f"📁 BASE_DIR: {BASE_DIR}")
print(f"🔑 DEBUG: {DEBUG}")
print(f"⏱️  Cache TTL: {RELAY_CACHE_TTL_MS}ms")
