# apps/__init__.py

"""
Trello Relay - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Exceções, middleware de erros, utilitários e health check
- board: Cache de snapshots, normalização de webhooks e WebSockets
"""

__version__ = '0.1.0'
__author__ = 'Equipe Vórtex'
