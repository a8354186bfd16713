from __future__ import annotations

import typing
import typing_extensions

from .files import File


class MemberCompositeKey(typing.TypedDict):
    server: str
    user: str


class Member(typing.TypedDict):
    _id: MemberCompositeKey
    joined_at: typing_extensions.NotRequired[str]
    nickname: typing_extensions.NotRequired[str]
    avatar: typing_extensions.NotRequired[File]
    roles: typing_extensions.NotRequired[list[str]]


class PartialMember(typing.TypedDict):
    nickname: typing_extensions.NotRequired[str]
    avatar: typing_extensions.NotRequired[File]
    roles: typing_extensions.NotRequired[list[str]]


FieldsMember = typing.Literal['Nickname', 'Avatar', 'Roles']
