# config/settings/base.py

import environ
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Configuração do django-environ
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    RELAY_CACHE_TTL_MS=(int, 30000),
    RELAY_WARM_BOARDS=(list, []),
)

# Lê o arquivo .env se existir
environ.Env.read_env(BASE_DIR / '.env')

# === CONFIGURAÇÕES BÁSICAS ===

SECRET_KEY = env('SECRET_KEY', default='django-insecure-CHANGE-ME-IN-PRODUCTION')

DEBUG = env('DEBUG', default=False)

ALLOWED_HOSTS = env('ALLOWED_HOSTS', default=[])

# === APLICAÇÕES ===

THIRD_PARTY_APPS = [
    # Async/WebSocket
    'channels',

    # CORS para o frontend
    'corsheaders',
]

LOCAL_APPS = [
    'apps.core',
    'apps.board',
]

INSTALLED_APPS = THIRD_PARTY_APPS + LOCAL_APPS

# === MIDDLEWARE ===

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'apps.core.middleware.RelayErrorMiddleware',  # Erros do relay -> JSON
]

ROOT_URLCONF = 'config.urls'

# === ASGI ===

ASGI_APPLICATION = 'config.asgi.application'

# === BANCO DE DADOS ===

# Sem persistência: o relay só guarda snapshots em memória
DATABASES = {}

# === CACHE ===

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'relay-default',
    },
    # Snapshots dos boards - sempre em memória do processo
    'snapshots': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'relay-snapshots',
        'OPTIONS': {
            'MAX_ENTRIES': 1000,
        },
    },
}

# === CHANNELS (WebSocket) ===

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# === CORS ===

CORS_ALLOW_ALL_ORIGINS = env('CORS_ALLOW_ALL_ORIGINS', cast=bool, default=True)

# === INTERNACIONALIZAÇÃO ===

LANGUAGE_CODE = 'pt-br'
TIME_ZONE = 'America/Sao_Paulo'
USE_I18N = True
USE_TZ = True

# === LOGGING ===

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'file': {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': BASE_DIR / 'logs' / 'relay.log',
            'maxBytes': 5 * 1024 * 1024,  # 5MB
            'backupCount': 3,
            'formatter': 'verbose',
        },
        'console': {
            'level': 'INFO',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['file'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}

# Criar pasta de logs se não existir
(BASE_DIR / 'logs').mkdir(exist_ok=True)

# === CONFIGURAÇÕES DO TRELLO ===

TRELLO_API_KEY = env('TRELLO_KEY', default='')
TRELLO_API_TOKEN = env('TRELLO_TOKEN', default='')
TRELLO_API_BASE_URL = env('TRELLO_API_BASE_URL', default='https://api.trello.com/1')

# Sem valor: usa o timeout padrão do httpx
TRELLO_TIMEOUT = env.float('TRELLO_TIMEOUT', default=None)

# === CONFIGURAÇÕES DO RELAY ===

# Tempo de vida dos snapshots de listas (milissegundos)
RELAY_CACHE_TTL_MS = env('RELAY_CACHE_TTL_MS')

# Boards carregados no startup (lifespan ASGI)
RELAY_WARM_BOARDS = env('RELAY_WARM_BOARDS')

# 'all' limpa o cache inteiro a cada mudança; 'board' só o board afetado
RELAY_INVALIDATION_SCOPE = env('RELAY_INVALIDATION_SCOPE', default='all')
