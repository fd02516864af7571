# config/settings/test.py

from .base import *

# === TESTES ===

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

TRELLO_API_KEY = 'test-key'
TRELLO_API_TOKEN = 'test-token'
TRELLO_API_BASE_URL = 'https://trello.test/1'

RELAY_CACHE_TTL_MS = 30000
RELAY_WARM_BOARDS = []
RELAY_INVALIDATION_SCOPE = 'all'

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# Desabilitar logs em testes
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
