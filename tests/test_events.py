from __future__ import annotations

import asyncio

import pytest
import robespierre

from conftest import DM, ME, MESSAGE, OTHER, SERVER, TEXT, message_payload, ready_payload


async def feed(client: robespierre.Client, payload: dict):
    event = client.state.parser.parse_event(client.shard, payload)
    await client.dispatch(event)
    return event


@pytest.mark.asyncio
async def test_ready_populates_cache(client: robespierre.Client):
    await feed(client, ready_payload())

    assert client.me is not None
    assert client.me.id == ME
    assert client.state.me_id == ME
    assert set(client.users) == {ME, OTHER}
    assert set(client.channels) == {TEXT, DM}
    assert client.get_server(SERVER) is not None
    assert client.get_member(SERVER, ME) is not None
    assert client.get_member(SERVER, OTHER) is None


@pytest.mark.asyncio
async def test_channel_update(client: robespierre.Client):
    await feed(client, ready_payload())
    event = await feed(
        client,
        {'type': 'ChannelUpdate', 'id': TEXT, 'data': {'name': 'lobby'}, 'clear': ['Description']},
    )

    assert isinstance(event, robespierre.ChannelUpdateEvent)
    assert event.before is not None
    assert event.before.name == 'general'
    assert event.before.description == 'Liberté, égalité, fraternité'

    channel = client.get_channel(TEXT)
    assert event.after is channel
    assert isinstance(channel, robespierre.TextChannel)
    assert channel.name == 'lobby'
    assert channel.description is None


@pytest.mark.asyncio
async def test_orphan_update_is_delivered_without_cache_update(client: robespierre.Client):
    received: list[robespierre.UserUpdateEvent] = []
    client.subscribe(robespierre.UserUpdateEvent, received.append)

    await feed(client, {'type': 'UserUpdate', 'id': OTHER, 'data': {'username': 'danton'}})

    assert len(received) == 1
    assert received[0].before is None
    assert received[0].after is None
    assert client.get_user(OTHER) is None


@pytest.mark.asyncio
async def test_message_lifecycle(client: robespierre.Client):
    await feed(client, ready_payload())
    await feed(client, {'type': 'Message', **message_payload()})

    message = client.get_message(TEXT, MESSAGE)
    assert message is not None
    assert message.content == 'Hello'

    channel = client.get_channel(TEXT)
    assert isinstance(channel, robespierre.TextChannel)
    assert channel.last_message_id == MESSAGE

    await feed(client, {'type': 'MessageUpdate', 'id': MESSAGE, 'channel': TEXT, 'data': {'content': 'Bonjour'}})
    updated = client.get_message(TEXT, MESSAGE)
    assert updated is not None
    assert updated.content == 'Bonjour'
    assert message.content == 'Hello'

    event = await feed(client, {'type': 'MessageDelete', 'id': MESSAGE, 'channel': TEXT})
    assert isinstance(event, robespierre.MessageDeleteEvent)
    assert event.message is updated
    assert client.get_message(TEXT, MESSAGE) is None


@pytest.mark.asyncio
async def test_channel_delete_updates_server(client: robespierre.Client):
    await feed(client, ready_payload())
    await feed(client, {'type': 'ChannelDelete', 'id': TEXT})

    assert client.get_channel(TEXT) is None
    server = client.get_server(SERVER)
    assert server is not None
    assert server.channel_ids == []


@pytest.mark.asyncio
async def test_events_applied_in_arrival_order(client: robespierre.Client):
    handler = client.shard.handler
    assert handler is not None

    handler.handle_raw(client.shard, ready_payload())
    handler.handle_raw(client.shard, {'type': 'UserUpdate', 'id': OTHER, 'data': {'username': 'danton'}})
    handler.handle_raw(client.shard, {'type': 'UserUpdate', 'id': OTHER, 'data': {'online': True}})

    # No await between messages, the cache must already reflect all of them
    user = client.get_user(OTHER)
    assert user is not None
    assert user.name == 'danton'
    assert user.online is True

    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_undecodable_messages_are_skipped(client: robespierre.Client):
    handler = client.shard.handler
    assert handler is not None

    handler.handle_raw(client.shard, {'type': 'Bogus'})
    handler.handle_raw(client.shard, {'type': 'ChannelDelete'})

    with pytest.raises(robespierre.ProtocolDecodeError):
        handler.handle_raw(client.shard, {'type': 'Ready', 'users': []})


@pytest.mark.asyncio
async def test_without_cache(uncached_client: robespierre.Client):
    event = await feed(uncached_client, ready_payload())

    assert isinstance(event, robespierre.ReadyEvent)
    assert isinstance(uncached_client.state.cache, robespierre.EmptyCache)
    assert uncached_client.get_channel(TEXT) is None
    assert uncached_client.me is None

    update = await feed(uncached_client, {'type': 'ChannelUpdate', 'id': TEXT, 'data': {'name': 'lobby'}})
    assert update.after is None
