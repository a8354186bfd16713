from __future__ import annotations

import pytest
import robespierre


class RecordingShard(robespierre.Shard):
    __slots__ = ('sent',)

    def __init__(self, **kwargs) -> None:
        super().__init__('token', state=robespierre.State(), **kwargs)
        self.sent: list[robespierre.ServerEvent] = []

    async def send(self, event: robespierre.ServerEvent, /) -> None:
        self.sent.append(event)


class RecordingHandler(robespierre.EventHandler):
    def __init__(self) -> None:
        self.payloads = []

    def handle_raw(self, shard, payload, /) -> None:
        self.payloads.append(payload)


@pytest.mark.asyncio
async def test_authenticate():
    bot = RecordingShard()
    await bot.authenticate()
    assert bot.sent == [robespierre.AuthenticateBot(token='token')]

    user_id = robespierre.UserID('01HZ8Q5GQYB4V6ZCT7Y9DEXN2M')
    user = RecordingShard(bot=False, user_id=user_id)
    await user.authenticate()
    assert user.sent == [robespierre.Authenticate(user_id=user_id, session_token='token')]

    with pytest.raises(TypeError):
        await RecordingShard(bot=False).authenticate()


@pytest.mark.asyncio
async def test_ping_time_wraps():
    shard = RecordingShard()
    shard._heartbeat_sequence = 0xFFFFFFFE

    await shard.ping()
    await shard.ping()

    assert [p.time for p in shard.sent] == [0xFFFFFFFF, 0]  # type: ignore
    assert shard.last_ping_at is not None


@pytest.mark.asyncio
async def test_pong_mismatch():
    handler = RecordingHandler()
    shard = RecordingShard(handler=handler)
    await shard.ping()

    assert await shard._handle({'type': 'Pong', 'time': 1})
    assert shard.last_pong_at is not None
    assert await shard._handle({'type': 'Pong', 'time': 5}) is False
    assert handler.payloads == [{'type': 'Pong', 'time': 1}]

    lenient = RecordingShard(handler=handler, reconnect_on_timeout=False)
    assert await lenient._handle({'type': 'Pong', 'time': 5})
    assert handler.payloads[-1] == {'type': 'Pong', 'time': 5}


@pytest.mark.asyncio
async def test_close_twice():
    shard = RecordingShard()
    await shard.close()

    with pytest.raises(robespierre.ShardClosedError):
        await shard.close()
