from __future__ import annotations

import typing

import pytest
import robespierre

from robespierre.cache import _USER_REQUEST

from conftest import (
    DM,
    ME,
    MESSAGE,
    OTHER,
    SERVER,
    TEXT,
    dm_channel_payload,
    message_payload,
    server_payload,
    text_channel_payload,
    user_payload,
)


class RecordingHTTPClient(robespierre.HTTPClient):
    """Answers requests from canned responses instead of Revolt API."""

    def __init__(self, *, state: robespierre.State) -> None:
        super().__init__('token', state=state)
        self.responses: dict[str, typing.Any] = {}
        self.requests: list[tuple[str, typing.Any, typing.Any]] = []

    async def request(self, route: robespierre.routes.CompiledRoute, **kwargs) -> typing.Any:
        key = str(route)
        self.requests.append((key, kwargs.get('json'), kwargs.get('headers')))
        try:
            return self.responses[key]
        except KeyError:
            raise robespierre.TransportError(route.route.method, self.url_for(route), ConnectionResetError()) from None


def make_client(cache: typing.Any = robespierre.UNDEFINED) -> tuple[robespierre.Client, RecordingHTTPClient]:
    client = robespierre.Client(token='token', cache=cache, http=lambda _, state: RecordingHTTPClient(state=state))
    http = client.http
    assert isinstance(http, RecordingHTTPClient)
    return client, http


@pytest.mark.asyncio
async def test_cache_hit_skips_request():
    client, http = make_client()
    client.state.cache.store_user(client.state.parser.parse_user(user_payload()), _USER_REQUEST)

    user = await client.resolve_user(ME)

    assert user.name == 'maximilien'
    assert http.requests == []


@pytest.mark.asyncio
async def test_cache_miss_fetches_and_stores():
    client, http = make_client()
    http.responses[f'GET /users/{OTHER}'] = user_payload(OTHER, username='georges')

    user = await client.resolve_user(OTHER)
    assert user.name == 'georges'
    assert client.get_user(OTHER) is user

    again = await client.resolve_user(OTHER)
    assert again is user
    assert len(http.requests) == 1


@pytest.mark.asyncio
async def test_without_cache_always_fetches():
    client, http = make_client(None)
    http.responses[f'GET /channels/{TEXT}'] = text_channel_payload()

    await client.resolve_channel(TEXT)
    await client.resolve_channel(TEXT)

    assert len(http.requests) == 2
    assert client.get_channel(TEXT) is None


@pytest.mark.asyncio
async def test_fetch_failure_propagates():
    client, http = make_client()

    with pytest.raises(robespierre.FetchError):
        await client.resolve_server(SERVER)

    assert client.get_server(SERVER) is None


@pytest.mark.asyncio
async def test_member_and_message():
    client, http = make_client()
    http.responses[f'GET /servers/{SERVER}/members/{ME}'] = {'_id': {'server': SERVER, 'user': ME}, 'nickname': 'Max'}
    http.responses[f'GET /channels/{DM}/messages/{MESSAGE}'] = message_payload(DM)

    member = await client.resolve_member(SERVER, ME)
    assert member.nickname == 'Max'
    assert client.get_member(SERVER, ME) is member

    message = await client.resolve_message(DM, MESSAGE)
    assert message.channel_id == DM
    assert client.get_message(DM, MESSAGE) is message


@pytest.mark.asyncio
async def test_message_accessors():
    client, http = make_client()
    http.responses[f'GET /channels/{DM}'] = dm_channel_payload()
    http.responses[f'GET /channels/{TEXT}'] = text_channel_payload()
    http.responses[f'GET /servers/{SERVER}'] = server_payload()

    parser = client.state.parser

    private = parser.parse_message(message_payload(DM))
    assert private.get_server() is None
    assert await private.resolve_server() is None
    assert await private.resolve_server_id() is None

    public = parser.parse_message(message_payload(TEXT))
    assert public.get_server_id() is None
    server = await public.resolve_server()
    assert server is not None
    assert server.id == SERVER
    assert public.get_server_id() == SERVER
    assert public.get_server() is server

    requested = [key for key, _, _ in http.requests]
    assert requested == [f'GET /channels/{DM}', f'GET /channels/{TEXT}', f'GET /servers/{SERVER}']


@pytest.mark.asyncio
async def test_reply():
    client, http = make_client()
    http.responses[f'POST /channels/{TEXT}/messages'] = message_payload(TEXT, _id='01HZ8QBE9F3G4H5J6K7M8N9P0Q')

    message = client.state.parser.parse_message(message_payload(TEXT))
    sent = await message.reply('Vive la République', mention=True)

    assert sent.channel_id == TEXT
    (_, json, headers), = http.requests
    assert json['content'] == 'Vive la République'
    assert json['replies'] == [{'id': MESSAGE, 'mention': True}]
    assert len(json['nonce']) == 26
    assert headers == {'Idempotency-Key': json['nonce']}


@pytest.mark.asyncio
async def test_send_message_with_nonce():
    client, http = make_client()
    http.responses[f'POST /channels/{DM}/messages'] = message_payload(DM)

    await client.send_message(DM, 'Salut', nonce='01HZ8QCF0G4H5J6K7M8N9P0QRS')

    (_, json, _), = http.requests
    assert json == {'nonce': '01HZ8QCF0G4H5J6K7M8N9P0QRS', 'content': 'Salut'}


@pytest.mark.parametrize(
    ('resolver', 'key', 'route', 'payload'),
    [
        (robespierre.CHANNEL_RESOLVER, TEXT, f'GET /channels/{TEXT}', text_channel_payload()),
        (robespierre.SERVER_RESOLVER, SERVER, f'GET /servers/{SERVER}', server_payload()),
        (robespierre.USER_RESOLVER, OTHER, f'GET /users/{OTHER}', user_payload(OTHER)),
        (
            robespierre.MEMBER_RESOLVER,
            robespierre.MemberID(server=SERVER, user=ME),
            f'GET /servers/{SERVER}/members/{ME}',
            {'_id': {'server': SERVER, 'user': ME}},
        ),
    ],
)
@pytest.mark.asyncio
async def test_second_resolve_hits_cache(resolver, key, route, payload):
    client, http = make_client()
    http.responses[route] = payload

    first = await resolver.resolve(client.state, key)
    second = await resolver.resolve(client.state, key)

    assert second is first
    assert [r for r, _, _ in http.requests] == [route]
    assert resolver.get_cached(client.state, key) is first
