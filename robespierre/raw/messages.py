from __future__ import annotations

import typing
import typing_extensions

from .files import File


class SystemMessage(typing.TypedDict):
    type: str
    id: typing_extensions.NotRequired[str]
    by: typing_extensions.NotRequired[str]
    name: typing_extensions.NotRequired[str]
    content: typing_extensions.NotRequired[str]


class Message(typing.TypedDict):
    _id: str
    nonce: typing_extensions.NotRequired[str]
    channel: str
    author: str
    content: typing_extensions.NotRequired[str | SystemMessage]
    system: typing_extensions.NotRequired[SystemMessage]
    attachments: typing_extensions.NotRequired[list[File]]
    edited: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[dict[str, typing.Any]]]
    mentions: typing_extensions.NotRequired[list[str]]
    replies: typing_extensions.NotRequired[list[str]]


class PartialMessage(typing.TypedDict):
    content: typing_extensions.NotRequired[str]
    edited: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[dict[str, typing.Any]]]


class ReplyIntent(typing.TypedDict):
    id: str
    mention: bool


class DataMessageSend(typing.TypedDict):
    nonce: typing_extensions.NotRequired[str]
    content: typing_extensions.NotRequired[str]
    attachments: typing_extensions.NotRequired[list[str]]
    replies: typing_extensions.NotRequired[list[ReplyIntent]]
