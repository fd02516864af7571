# apps/core/apps.py

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuração da app Core"""

    name = 'apps.core'
    verbose_name = 'Core - Sistema Base'
