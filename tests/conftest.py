"""Pytest configuration and fixtures for the relay tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import httpx
import pytest
from channels.layers import channel_layers

from apps.board.broadcast import EventBroadcaster
from apps.board.cache import SnapshotCache
from apps.board.services import RelayServices, configure_services, shutdown_services
from apps.board.trello import TrelloClient

TRELLO_BASE_URL = 'https://trello.test/1'


class FakeClock:
    """Relógio controlável para testar TTL"""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeTrello:
    """
    Trello falso servido via httpx.MockTransport

    Respostas registradas por (método, caminho). O corpo pode ser um valor
    JSON, uma função que recebe o request, ou uma exceção a ser levantada.
    """

    def __init__(self):
        self.requests = []
        self._routes = {}

    def respond(self, method, path, json=None, status=200):
        self._routes[(method, f'/1{path}')] = (status, json)

    def fail(self, method, path, exc):
        self._routes[(method, f'/1{path}')] = (None, exc)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == f'/1{path}']

    def handler(self, request):
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text='The requested resource was not found.')

        status, body = route
        if isinstance(body, Exception):
            raise body
        if callable(body):
            body = body(request)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


@pytest.fixture(autouse=True)
def fresh_channel_layers():
    """Channel layer em memória novo a cada teste"""
    channel_layers.backends.clear()
    yield
    channel_layers.backends.clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def trello():
    return FakeTrello()


@pytest.fixture
def trello_client(trello):
    return TrelloClient(
        api_key='test-key',
        api_token='test-token',
        base_url=TRELLO_BASE_URL,
        transport=httpx.MockTransport(trello.handler),
    )


@pytest.fixture
def cache(clock):
    cache = SnapshotCache(ttl=timedelta(milliseconds=30000), clock=clock)
    cache.invalidate()
    yield cache
    cache.close()


@pytest.fixture
def broadcaster():
    """Broadcaster falso; broadcast vira AsyncMock"""
    return MagicMock(spec=EventBroadcaster)


@pytest.fixture
def services(cache, trello_client, broadcaster):
    services = RelayServices.build(cache=cache, client=trello_client, broadcaster=broadcaster)
    configure_services(services)
    yield services
    shutdown_services()


@pytest.fixture
def gateway(services):
    return services.gateway
