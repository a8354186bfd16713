from __future__ import annotations

import typing
import typing_extensions

from .files import File
from .permissions import OverrideField


class Server(typing.TypedDict):
    _id: str
    owner: str
    name: str
    description: typing_extensions.NotRequired[str]
    channels: list[str]
    categories: typing_extensions.NotRequired[list[Category]]
    system_messages: typing_extensions.NotRequired[SystemMessageChannels]
    roles: typing_extensions.NotRequired[dict[str, Role]]
    default_permissions: int
    icon: typing_extensions.NotRequired[File]
    banner: typing_extensions.NotRequired[File]
    flags: typing_extensions.NotRequired[int]
    nsfw: typing_extensions.NotRequired[bool]


class PartialServer(typing.TypedDict):
    owner: typing_extensions.NotRequired[str]
    name: typing_extensions.NotRequired[str]
    description: typing_extensions.NotRequired[str]
    channels: typing_extensions.NotRequired[list[str]]
    categories: typing_extensions.NotRequired[list[Category]]
    system_messages: typing_extensions.NotRequired[SystemMessageChannels]
    default_permissions: typing_extensions.NotRequired[int]
    icon: typing_extensions.NotRequired[File]
    banner: typing_extensions.NotRequired[File]
    flags: typing_extensions.NotRequired[int]
    nsfw: typing_extensions.NotRequired[bool]


class Role(typing.TypedDict):
    name: str
    permissions: OverrideField
    colour: typing_extensions.NotRequired[str]
    hoist: typing_extensions.NotRequired[bool]
    rank: typing_extensions.NotRequired[int]


class PartialRole(typing.TypedDict):
    name: typing_extensions.NotRequired[str]
    permissions: typing_extensions.NotRequired[OverrideField]
    colour: typing_extensions.NotRequired[str]
    hoist: typing_extensions.NotRequired[bool]
    rank: typing_extensions.NotRequired[int]


class Category(typing.TypedDict):
    id: str
    title: str
    channels: list[str]


class SystemMessageChannels(typing.TypedDict):
    user_joined: typing_extensions.NotRequired[str]
    user_left: typing_extensions.NotRequired[str]
    user_kicked: typing_extensions.NotRequired[str]
    user_banned: typing_extensions.NotRequired[str]


FieldsServer = typing.Literal['Description', 'Categories', 'SystemMessages', 'Icon', 'Banner']
FieldsRole = typing.Literal['Colour']
