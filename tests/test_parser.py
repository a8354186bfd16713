from __future__ import annotations

import pytest
import robespierre

from conftest import DM, ME, MESSAGE, SERVER, TEXT, message_payload, ready_payload, text_channel_payload


def parse(client: robespierre.Client, payload):
    return client.state.parser.parse_event(client.shard, payload)


def test_unknown_type(client: robespierre.Client):
    with pytest.raises(robespierre.ProtocolDecodeError) as exc_info:
        parse(client, {'type': 'Bogus'})
    assert exc_info.value.tag == 'Bogus'


@pytest.mark.parametrize('payload', [[], 'Ready', {}, {'type': 1}])
def test_missing_discriminator(client: robespierre.Client, payload):
    with pytest.raises(robespierre.ProtocolDecodeError) as exc_info:
        parse(client, payload)
    assert exc_info.value.tag is None


def test_structural_errors(client: robespierre.Client):
    with pytest.raises(robespierre.ProtocolDecodeError) as exc_info:
        parse(client, {'type': 'MessageDelete', 'id': MESSAGE})
    assert exc_info.value.tag == 'MessageDelete'

    with pytest.raises(robespierre.ProtocolDecodeError):
        parse(client, {'type': 'MessageDelete', 'id': 42, 'channel': TEXT})

    with pytest.raises(robespierre.ProtocolDecodeError):
        parse(client, {'type': 'Pong', 'time': True})

    with pytest.raises(robespierre.ProtocolDecodeError):
        parse(client, {'type': 'UserRelationship', 'id': ME, 'user': ME, 'status': 'Lover'})


def test_extra_keys_are_ignored(client: robespierre.Client):
    event = parse(client, {'type': 'ChannelStartTyping', 'id': TEXT, 'user': ME, 'since': 'forever'})

    assert isinstance(event, robespierre.ChannelStartTypingEvent)
    assert event.channel_id == TEXT
    assert event.user_id == ME


def test_ready(client: robespierre.Client):
    event = parse(client, ready_payload())

    assert isinstance(event, robespierre.ReadyEvent)
    assert [u.name for u in event.users] == ['maximilien', 'georges']
    assert event.servers[0].id == SERVER
    assert isinstance(event.channels[0], robespierre.TextChannel)
    assert isinstance(event.channels[1], robespierre.DMChannel)
    assert event.members[0].id == robespierre.MemberID(server=SERVER, user=ME)


@pytest.mark.parametrize(
    ('clear', 'expected'),
    [
        (None, ()),
        ('Description', (robespierre.ChannelField.description,)),
        (['Icon', 'Description'], (robespierre.ChannelField.icon, robespierre.ChannelField.description)),
    ],
)
def test_channel_update_clear(client: robespierre.Client, clear, expected):
    payload = {'type': 'ChannelUpdate', 'id': TEXT, 'data': {'name': 'lobby'}}
    if clear is not None:
        payload['clear'] = clear

    event = parse(client, payload)

    assert isinstance(event, robespierre.ChannelUpdateEvent)
    assert event.data.name == 'lobby'
    assert event.data.description is robespierre.UNDEFINED
    assert event.clear == expected


def test_invalid_clear(client: robespierre.Client):
    with pytest.raises(robespierre.ProtocolDecodeError):
        parse(client, {'type': 'ChannelUpdate', 'id': TEXT, 'data': {}, 'clear': 1})

    with pytest.raises(robespierre.ProtocolDecodeError):
        parse(client, {'type': 'ChannelUpdate', 'id': TEXT, 'data': {}, 'clear': ['Nonsense']})


def test_message(client: robespierre.Client):
    event = parse(client, {'type': 'Message', **message_payload(DM, nonce='01HZ8QAD8E2F3G4H5J6K7M8N9P')})

    assert isinstance(event, robespierre.MessageCreateEvent)
    message = event.message
    assert message.id == MESSAGE
    assert message.channel_id == DM
    assert message.content == 'Hello'
    assert message.system is None


def test_legacy_system_message(client: robespierre.Client):
    message = client.state.parser.parse_message(message_payload(content={'type': 'user_joined', 'id': ME}))

    assert message.content == ''
    assert message.system is not None
    assert message.system.type == 'user_joined'
    assert message.system.data == {'id': ME}


def test_text_channel(client: robespierre.Client):
    channel = client.state.parser.parse_channel(text_channel_payload(nsfw=True))

    assert isinstance(channel, robespierre.TextChannel)
    assert channel.server_id == SERVER
    assert channel.nsfw is True
    assert channel.get_server_id() == SERVER


def test_authenticate_kinds(client: robespierre.Client):
    parser = client.state.parser

    assert parser.parse_server_event({'type': 'Authenticate', 'token': 't'}) == robespierre.AuthenticateBot(token='t')
    assert parser.parse_server_event(
        {'type': 'Authenticate', 'user_id': ME, 'session_token': 's'}
    ) == robespierre.Authenticate(user_id=ME, session_token='s')


def test_ping_data(client: robespierre.Client):
    ping = robespierre.Ping(time=0xFFFFFFFF, data=(1,))

    assert client.state.parser.parse_server_event(robespierre.encode_server_event(ping)) == ping
    assert client.state.parser.parse_server_event({'type': 'Ping', 'time': 3}) == robespierre.Ping(time=3)


def test_server_event_shapes():
    assert robespierre.encode_server_event(robespierre.Ping(time=7)) == {'type': 'Ping', 'time': 7, 'data': [0]}
    assert robespierre.encode_server_event(robespierre.AuthenticateBot(token='t')) == {
        'type': 'Authenticate',
        'token': 't',
    }

    with pytest.raises(ValueError):
        robespierre.encode_server_event(robespierre.Ping(time=1 << 32))


@pytest.mark.parametrize('key', ['message', 'error'])
def test_error(client: robespierre.Client, key):
    event = parse(client, {'type': 'Error', key: 'InvalidSession'})

    assert isinstance(event, robespierre.ErrorEvent)
    assert event.error == 'InvalidSession'


def test_error_without_reason(client: robespierre.Client):
    with pytest.raises(robespierre.ProtocolDecodeError) as exc_info:
        parse(client, {'type': 'Error'})
    assert exc_info.value.tag == 'Error'
