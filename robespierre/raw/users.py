from __future__ import annotations

import typing
import typing_extensions

from .files import File


class User(typing.TypedDict):
    _id: str
    username: str
    avatar: typing_extensions.NotRequired[File]
    relations: typing_extensions.NotRequired[list[Relationship]]
    badges: typing_extensions.NotRequired[int]
    status: typing_extensions.NotRequired[UserStatus]
    profile: typing_extensions.NotRequired[UserProfile]
    relationship: typing_extensions.NotRequired[RelationshipStatus]
    online: typing_extensions.NotRequired[bool]
    flags: typing_extensions.NotRequired[int]
    bot: typing_extensions.NotRequired[BotInformation]


class PartialUser(typing.TypedDict):
    username: typing_extensions.NotRequired[str]
    avatar: typing_extensions.NotRequired[File]
    badges: typing_extensions.NotRequired[int]
    status: typing_extensions.NotRequired[UserStatus]
    profile: typing_extensions.NotRequired[UserProfile]
    online: typing_extensions.NotRequired[bool]
    flags: typing_extensions.NotRequired[int]


FieldsUser = typing.Literal[
    'Avatar',
    'StatusText',
    'StatusPresence',
    'ProfileContent',
    'ProfileBackground',
]

RelationshipStatus = typing.Literal['None', 'User', 'Friend', 'Outgoing', 'Incoming', 'Blocked', 'BlockedOther']


class Relationship(typing.TypedDict):
    _id: str
    status: RelationshipStatus


Presence = typing.Literal['Online', 'Idle', 'Busy', 'Invisible']


class UserStatus(typing.TypedDict):
    text: typing_extensions.NotRequired[str]
    presence: typing_extensions.NotRequired[Presence]


class UserProfile(typing.TypedDict):
    content: typing_extensions.NotRequired[str]
    background: typing_extensions.NotRequired[File]


class BotInformation(typing.TypedDict):
    owner: str
