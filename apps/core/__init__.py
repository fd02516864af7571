# apps/core/__init__.py

"""
Core - Aplicação base do Trello Relay

Contém:
- Hierarquia de exceções e middleware que as traduz em JSON
- Utilitários de fingerprint e datas HTTP
- Health check para monitoramento
"""
