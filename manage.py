#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Trello Relay - Proxy em tempo real para o Trello
Startup Vórtex © 2024
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Configuração padrão para desenvolvimento
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Atalho para subir o servidor ASGI (HTTP + WebSocket + lifespan)
    if len(sys.argv) > 1 and sys.argv[1] == 'serve':
        import uvicorn

        port = int(os.environ.get('PORT', 5000))
        print(f"🚀 Trello Relay rodando na porta {port}")
        uvicorn.run('config.asgi:application', host='0.0.0.0', port=port, lifespan='on')
        return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
