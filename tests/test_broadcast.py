"""Tests for the websocket fan-out."""

from unittest.mock import AsyncMock, patch

import pytest
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator

from apps.board.broadcast import BOARD_EVENTS_GROUP, TASK_CREATED, TRELLO_EVENT, EventBroadcaster
from apps.board.routing import websocket_urlpatterns


def make_communicator():
    return WebsocketCommunicator(URLRouter(websocket_urlpatterns), '/ws/board/')


class TestEventBroadcaster:

    @pytest.mark.asyncio
    async def test_broadcast_reaches_group_members(self):
        """Test message shape published on the channel layer."""
        layer = get_channel_layer()
        channel = await layer.new_channel()
        await layer.group_add(BOARD_EVENTS_GROUP, channel)

        await EventBroadcaster().broadcast(TASK_CREATED, {'id': 'C1'})

        message = await layer.receive(channel)
        assert message == {'type': 'board.event', 'channel': TASK_CREATED, 'payload': {'id': 'C1'}}

    @pytest.mark.asyncio
    async def test_broadcast_without_subscribers_is_silent(self):
        await EventBroadcaster().broadcast(TASK_CREATED, {'id': 'C1'})

    @pytest.mark.asyncio
    async def test_missing_channel_layer_is_not_an_error(self):
        broadcaster = EventBroadcaster()

        with patch.object(broadcaster, '_channel_layer', return_value=None):
            await broadcaster.broadcast(TASK_CREATED, {'id': 'C1'})

    @pytest.mark.asyncio
    async def test_layer_failure_is_not_raised(self):
        """Test best-effort delivery: errors stay with the broadcaster."""
        broadcaster = EventBroadcaster()
        failing_layer = AsyncMock()
        failing_layer.group_send.side_effect = ConnectionError('redis fora')

        with patch.object(broadcaster, '_channel_layer', return_value=failing_layer):
            await broadcaster.broadcast(TASK_CREATED, {'id': 'C1'})

        failing_layer.group_send.assert_awaited_once()


class TestBoardEventsConsumer:

    @pytest.mark.asyncio
    async def test_connected_client_receives_broadcast(self):
        communicator = make_communicator()
        connected, _ = await communicator.connect()
        assert connected

        await EventBroadcaster().broadcast(TRELLO_EVENT, {'kind': 'cardMoved'})

        message = await communicator.receive_json_from()
        assert message == {'type': TRELLO_EVENT, 'payload': {'kind': 'cardMoved'}}

        await communicator.disconnect()

    @pytest.mark.asyncio
    async def test_every_client_receives_in_order(self):
        first = make_communicator()
        second = make_communicator()
        await first.connect()
        await second.connect()

        broadcaster = EventBroadcaster()
        await broadcaster.broadcast('taskCreated', {'n': 1})
        await broadcaster.broadcast('taskUpdated', {'n': 2})

        for communicator in (first, second):
            assert (await communicator.receive_json_from())['payload'] == {'n': 1}
            assert (await communicator.receive_json_from())['payload'] == {'n': 2}

        await first.disconnect()
        await second.disconnect()

    @pytest.mark.asyncio
    async def test_disconnected_client_misses_later_events(self):
        communicator = make_communicator()
        await communicator.connect()
        await communicator.disconnect()

        await EventBroadcaster().broadcast(TASK_CREATED, {'id': 'C1'})

        layer = get_channel_layer()
        assert not layer.groups.get(BOARD_EVENTS_GROUP)

    @pytest.mark.asyncio
    async def test_ping_pong(self):
        communicator = make_communicator()
        await communicator.connect()

        await communicator.send_json_to({'type': 'ping'})
        response = await communicator.receive_json_from()

        assert response['type'] == 'pong'
        assert 'timestamp' in response
        await communicator.disconnect()

    @pytest.mark.asyncio
    async def test_other_client_messages_are_ignored(self):
        communicator = make_communicator()
        await communicator.connect()

        await communicator.send_json_to({'type': 'subscribe', 'board': 'B1'})

        assert await communicator.receive_nothing()
        await communicator.disconnect()
