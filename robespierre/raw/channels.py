from __future__ import annotations

import typing
import typing_extensions

from .files import File
from .permissions import OverrideField


class SavedMessagesChannel(typing.TypedDict):
    channel_type: typing.Literal['SavedMessages']
    _id: str
    user: str


class DirectMessageChannel(typing.TypedDict):
    channel_type: typing.Literal['DirectMessage']
    _id: str
    active: bool
    recipients: list[str]
    last_message_id: typing_extensions.NotRequired[str]


class GroupChannel(typing.TypedDict):
    channel_type: typing.Literal['Group']
    _id: str
    name: str
    owner: str
    description: typing_extensions.NotRequired[str]
    recipients: list[str]
    icon: typing_extensions.NotRequired[File]
    last_message_id: typing_extensions.NotRequired[str]
    permissions: typing_extensions.NotRequired[int]
    nsfw: typing_extensions.NotRequired[bool]


class TextChannel(typing.TypedDict):
    channel_type: typing.Literal['TextChannel']
    _id: str
    server: str
    name: str
    description: typing_extensions.NotRequired[str]
    icon: typing_extensions.NotRequired[File]
    last_message_id: typing_extensions.NotRequired[str]
    default_permissions: typing_extensions.NotRequired[OverrideField]
    role_permissions: typing_extensions.NotRequired[dict[str, OverrideField]]
    nsfw: typing_extensions.NotRequired[bool]


class VoiceChannel(typing.TypedDict):
    channel_type: typing.Literal['VoiceChannel']
    _id: str
    server: str
    name: str
    description: typing_extensions.NotRequired[str]
    icon: typing_extensions.NotRequired[File]
    default_permissions: typing_extensions.NotRequired[OverrideField]
    role_permissions: typing_extensions.NotRequired[dict[str, OverrideField]]
    nsfw: typing_extensions.NotRequired[bool]


PrivateChannel = SavedMessagesChannel | DirectMessageChannel | GroupChannel
ServerChannel = TextChannel | VoiceChannel
Channel = PrivateChannel | ServerChannel


class PartialChannel(typing.TypedDict):
    name: typing_extensions.NotRequired[str]
    owner: typing_extensions.NotRequired[str]
    description: typing_extensions.NotRequired[str]
    icon: typing_extensions.NotRequired[File]
    nsfw: typing_extensions.NotRequired[bool]
    active: typing_extensions.NotRequired[bool]
    permissions: typing_extensions.NotRequired[int]
    role_permissions: typing_extensions.NotRequired[dict[str, OverrideField]]
    default_permissions: typing_extensions.NotRequired[OverrideField]
    last_message_id: typing_extensions.NotRequired[str]


FieldsChannel = typing.Literal['Description', 'Icon', 'DefaultPermissions']
