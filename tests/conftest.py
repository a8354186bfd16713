from __future__ import annotations

import pytest
import robespierre

ME = robespierre.UserID('01HZ8Q5GQYB4V6ZCT7Y9DEXN2M')
OTHER = robespierre.UserID('01HZ8Q6R1WT3K0ZB2H4MNV7PQS')
SERVER = robespierre.ServerID('01HZ8Q7A5D9E3FGHJKMNPQRSTV')
TEXT = robespierre.ChannelID('01HZ8Q8B6C0D1E2F3G4H5J6K7M')
DM = robespierre.ChannelID('01HZ8Q9C7D1E2F3G4H5J6K7M8N')
MESSAGE = robespierre.MessageID('01HZ8QAD8E2F3G4H5J6K7M8N9P')


def user_payload(user_id: str = ME, **kwargs) -> dict:
    return {'_id': user_id, 'username': 'maximilien', **kwargs}


def text_channel_payload(**kwargs) -> dict:
    return {
        'channel_type': 'TextChannel',
        '_id': TEXT,
        'server': SERVER,
        'name': 'general',
        'description': 'Liberté, égalité, fraternité',
        **kwargs,
    }


def dm_channel_payload(**kwargs) -> dict:
    return {
        'channel_type': 'DirectMessage',
        '_id': DM,
        'active': True,
        'recipients': [ME, OTHER],
        **kwargs,
    }


def server_payload(**kwargs) -> dict:
    return {
        '_id': SERVER,
        'owner': ME,
        'name': 'Convention',
        'channels': [TEXT],
        'default_permissions': 0,
        **kwargs,
    }


def message_payload(channel_id: str = TEXT, **kwargs) -> dict:
    return {'_id': MESSAGE, 'channel': channel_id, 'author': OTHER, 'content': 'Hello', **kwargs}


def ready_payload() -> dict:
    return {
        'type': 'Ready',
        'users': [user_payload(relationship='User'), user_payload(OTHER, username='georges')],
        'servers': [server_payload()],
        'channels': [text_channel_payload(), dm_channel_payload()],
        'members': [{'_id': {'server': SERVER, 'user': ME}}],
    }


@pytest.fixture
def client() -> robespierre.Client:
    return robespierre.Client(token='token')


@pytest.fixture
def uncached_client() -> robespierre.Client:
    return robespierre.Client(token='token', cache=None)
