# apps/board/__init__.py

"""
Board - Relay em tempo real para o Trello

Funcionalidades:
- Proxy das operações de cards e boards
- Cache de listas com TTL e fingerprint
- Normalização de webhooks do Trello
- WebSockets para atualizações em tempo real
"""
