from __future__ import annotations

from attrs import define, field
import asyncio
import pytest
import robespierre


@define(slots=True)
class AddEvent(robespierre.BaseEvent):
    a: int = field(repr=True, kw_only=True)
    b: int = field(repr=True, kw_only=True)


@define(slots=True)
class SubtractEvent(robespierre.BaseEvent):
    a: int = field(repr=True, kw_only=True)
    b: int = field(repr=True, kw_only=True)


@pytest.mark.asyncio
async def test_events():
    queue: asyncio.Queue[int] = asyncio.Queue()

    client = robespierre.Client()

    async def on_add(event: AddEvent, /) -> None:
        await queue.put(event.a + event.b)

    async def on_subtract(event: SubtractEvent, /) -> None:
        await queue.put(event.a - event.b)

    client.subscribe(AddEvent, on_add)
    client.subscribe(SubtractEvent, on_subtract)

    await client.dispatch(AddEvent(a=1, b=2))
    await client.dispatch(SubtractEvent(a=13, b=7))

    response = await asyncio.wait_for(queue.get(), timeout=1)
    assert response == 3

    response = await asyncio.wait_for(queue.get(), timeout=1)
    assert response == 6

    subscription = client.wait_for(AddEvent, check=lambda event, /: event.a == 0xDEAD, timeout=3)
    await client.dispatch(AddEvent(a=1, b=1))
    await client.dispatch(AddEvent(a=0xDEAD, b=11))

    event = await subscription
    assert event.a + event.b == 57016
    assert client._handlers[AddEvent][1] == {}


@pytest.mark.asyncio
async def test_wait_for_timeout():
    client = robespierre.Client()

    with pytest.raises(asyncio.TimeoutError):
        await client.wait_for(AddEvent, timeout=0.01)


@pytest.mark.asyncio
async def test_listen_uses_annotation():
    client = robespierre.Client()
    received = []

    @client.listen()
    def on_subtract(event: SubtractEvent) -> None:
        received.append(event.a - event.b)

    assert isinstance(on_subtract, robespierre.EventSubscription)
    assert client.subscriptions_for(SubtractEvent) == [on_subtract]

    await client.dispatch(SubtractEvent(a=5, b=3))
    assert received == [2]

    on_subtract.remove()
    await client.dispatch(SubtractEvent(a=5, b=3))
    assert received == [2]


def test_listen_requires_annotation():
    client = robespierre.Client()

    with pytest.raises(TypeError):
        client.listen()(lambda event: None)


@pytest.mark.asyncio
async def test_parent_subscriptions():
    client = robespierre.Client()
    received = []

    client.subscribe(robespierre.BaseEvent, received.append)
    await client.dispatch(AddEvent(a=1, b=2))

    assert received == [AddEvent(a=1, b=2)]
    assert client.subscriptions_for(robespierre.BaseEvent, include_subclasses=True) != []


@pytest.mark.asyncio
async def test_unsubscribe():
    client = robespierre.Client()
    received = []

    client.subscribe(AddEvent, received.append)
    removed = client.unsubscribe(AddEvent, received.append)
    await client.dispatch(AddEvent(a=1, b=2))

    assert len(removed) == 1
    assert received == []
    assert client.unsubscribe(SubtractEvent, received.append) == []


class CountingClient(robespierre.Client):
    __slots__ = ('pongs', 'errors')

    def __init__(self) -> None:
        super().__init__()
        self.pongs: list[int] = []
        self.errors: list[robespierre.BaseEvent] = []

    def on_pong(self, event: robespierre.PongEvent, /) -> None:
        self.pongs.append(event.time)
        if event.time == 13:
            raise RuntimeError('unlucky')

    async def on_user_error(self, event: robespierre.BaseEvent) -> None:
        self.errors.append(event)


@pytest.mark.asyncio
async def test_event_methods_and_user_errors():
    client = CountingClient()

    await client.dispatch(robespierre.PongEvent(shard=client.shard, time=7))
    await client.dispatch(robespierre.PongEvent(shard=client.shard, time=13))

    assert client.pongs == [7, 13]
    assert len(client.errors) == 1
    assert isinstance(client.errors[0], robespierre.PongEvent)
    assert client.errors[0].time == 13


@pytest.mark.asyncio
async def test_typing():
    sent = []

    class TypingShard(robespierre.Shard):
        async def send(self, event) -> None:
            sent.append(event)

    client = robespierre.Client(shard=lambda _, state: TypingShard('token', state=state))
    channel_id = robespierre.ChannelID('01HZ8Q8B6C0D1E2F3G4H5J6K7M')

    async with client.typing(channel_id):
        assert sent == [robespierre.BeginTyping(channel=channel_id)]

    assert sent == [robespierre.BeginTyping(channel=channel_id), robespierre.EndTyping(channel=channel_id)]
