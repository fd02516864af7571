"""Tests for startup/shutdown wiring and the management command."""

import asyncio
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from apps.board import services as services_module
from apps.board.lifespan import RelayLifespan
from apps.board.services import RelayServices, get_services


async def run_lifespan(*message_types):
    """Executa o app lifespan e devolve as mensagens enviadas"""
    incoming = asyncio.Queue()
    for message_type in message_types:
        incoming.put_nowait({'type': message_type})
    sent = []

    async def send(message):
        sent.append(message['type'])

    await RelayLifespan()({'type': 'lifespan'}, incoming.get, send)
    return sent


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_warms_configured_boards(self, settings, services, trello, cache):
        settings.RELAY_WARM_BOARDS = ['B1', 'B2']
        trello.respond('GET', '/boards/B1/lists', json=[{'id': 'L1'}])
        trello.respond('GET', '/boards/B2/lists', json='not found', status=404)

        sent = await run_lifespan('lifespan.startup', 'lifespan.shutdown')

        assert sent == ['lifespan.startup.complete', 'lifespan.shutdown.complete']
        assert len(trello.calls('GET', '/boards/B1/lists')) == 1
        assert len(trello.calls('GET', '/boards/B2/lists')) == 1

    @pytest.mark.asyncio
    async def test_shutdown_tears_down_services(self, settings, services, cache):
        settings.RELAY_WARM_BOARDS = []
        cache.put('B1', [])

        await run_lifespan('lifespan.startup', 'lifespan.shutdown')

        assert services_module._services is None
        assert cache.get('B1') is None


class TestServices:

    def test_build_from_settings(self, settings):
        settings.RELAY_CACHE_TTL_MS = 5000
        settings.RELAY_INVALIDATION_SCOPE = 'board'

        services = RelayServices.build()

        assert services.cache.stats()['ttl_ms'] == 5000
        assert services.invalidator.scope == 'board'
        assert services.gateway.cache is services.cache

    def test_get_services_returns_configured_instance(self, services):
        assert get_services() is services


class TestRegisterWebhookCommand:

    def test_registers_webhook(self, services, trello):
        trello.respond('POST', '/webhooks', json={'id': 'W1'})
        out = StringIO()

        call_command('register_webhook', 'https://relay.test/webhook', 'B1', stdout=out)

        params = trello.calls('POST', '/webhooks')[0].url.params
        assert params['callbackURL'] == 'https://relay.test/webhook'
        assert params['idModel'] == 'B1'
        assert params['description'] == 'Trello Relay'
        assert 'W1' in out.getvalue()

    def test_upstream_refusal_becomes_command_error(self, services, trello):
        trello.respond('POST', '/webhooks', json='invalid callback', status=400)

        with pytest.raises(CommandError, match='invalid callback'):
            call_command('register_webhook', 'nope', 'B1', stdout=StringIO())
