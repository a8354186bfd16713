"""
The MIT License (MIT)

Copyright (c) 2024-present MCausc78

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

from attrs import define, field
from datetime import datetime
import typing

from . import cache as caching
from .asset import Asset
from .base import Base
from .core import UNDEFINED, UndefinedOr, ChannelID, MessageID, ServerID, UserID
from .resolve import CHANNEL_RESOLVER, USER_RESOLVER

if typing.TYPE_CHECKING:
    from . import raw
    from .channel import Channel
    from .server import Server
    from .user import User


@define(slots=True, frozen=True)
class Reply:
    """Represents a message reply."""

    id: MessageID = field(repr=True)
    """:class:`.MessageID`: The ID of the message that being replied to."""

    mention: bool = field(repr=True, default=False)
    """:class:`bool`: Whether to mention author of referenced message or not."""

    def build(self) -> raw.ReplyIntent:
        return {
            'id': self.id,
            'mention': self.mention,
        }


@define(slots=True, frozen=True)
class SystemMessage:
    """Represents a system event that occured in channel, such as user joining a group."""

    type: str = field(repr=True, kw_only=True)
    """:class:`str`: The system event type, e.g. ``'user_joined'``."""

    data: dict[str, typing.Any] = field(repr=True, kw_only=True, hash=False)
    """Dict[:class:`str`, Any]: The event specific data, such as ``id`` or ``by``."""


@define(slots=True, eq=False)
class BaseMessage(Base):
    """Base class for all message types."""

    id: MessageID = field(repr=True, kw_only=True)
    """:class:`.MessageID`: The ID of the message."""

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID this message was sent in."""

    def get_channel(self) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: The channel this message was sent in, if it is cached."""
        return self.state.cache.get_channel(self.channel_id, caching._USER_REQUEST)

    def get_server_id(self) -> typing.Optional[ServerID]:
        """Optional[:class:`.ServerID`]: The ID of server this message was sent in.

        Returns ``None`` if message was sent in private channel, or the channel is not cached.
        """
        channel = self.get_channel()
        if channel is None:
            return None
        return channel.get_server_id()

    def get_server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server this message was sent in, if it is cached."""
        channel = self.get_channel()
        if channel is None:
            return None
        return channel.get_server()

    async def resolve_channel(self) -> Channel:
        """|coro|

        Retrieves the channel this message was sent in, from cache or API.

        Raises
        ------
        FetchError
            Retrieving the channel failed.
        """
        return await CHANNEL_RESOLVER.resolve(self.state, self.channel_id)

    async def resolve_server_id(self) -> typing.Optional[ServerID]:
        """|coro|

        Retrieves the ID of server this message was sent in. Returns ``None`` for private channels.
        """
        channel = await self.resolve_channel()
        return channel.get_server_id()

    async def resolve_server(self) -> typing.Optional[Server]:
        """|coro|

        Retrieves the server this message was sent in, from cache or API.

        Returns ``None`` for private channels.
        """
        channel = await self.resolve_channel()
        return await channel.resolve_server()

    async def reply(self, content: str, *, mention: bool = False, nonce: typing.Optional[str] = None) -> Message:
        """|coro|

        Replies to this message.

        Parameters
        ----------
        content: :class:`str`
            The message content.
        mention: :class:`bool`
            Whether to mention author of message you're replying to.
        nonce: Optional[:class:`str`]
            The message nonce. Generated automatically if not provided.

        Returns
        -------
        :class:`.Message`
            The message sent.
        """
        return await self.state.http.send_message(
            self.channel_id,
            content,
            nonce=nonce,
            replies=[Reply(self.id, mention)],
        )


@define(slots=True, eq=False)
class PartialMessage(BaseMessage):
    """Represents partial message in channel on Revolt.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'message'

    content: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new message's content."""

    edited_at: UndefinedOr[datetime] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`~datetime.datetime`]: When message was edited."""

    embeds: UndefinedOr[list[dict[str, typing.Any]]] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[List[Dict[:class:`str`, Any]]]: The new message embeds."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(v is UNDEFINED for v in (self.content, self.edited_at, self.embeds))


@define(slots=True, eq=False)
class Message(BaseMessage):
    """Represents a message in channel on Revolt."""

    author_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who sent this message."""

    nonce: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The unique value generated by client sending this message."""

    content: str = field(repr=True, kw_only=True)
    """:class:`str`: The message's content. Empty for system messages."""

    system: typing.Optional[SystemMessage] = field(repr=True, kw_only=True)
    """Optional[:class:`.SystemMessage`]: The system event information, occured in this message, if any."""

    attachments: list[Asset] = field(repr=True, kw_only=True)
    """List[:class:`.Asset`]: The attachments on this message."""

    edited_at: typing.Optional[datetime] = field(repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: Timestamp at which this message was last edited."""

    embeds: list[dict[str, typing.Any]] = field(repr=True, kw_only=True)
    """List[Dict[:class:`str`, Any]]: The attached embeds to this message."""

    mentions: list[UserID] = field(repr=True, kw_only=True)
    """List[:class:`.UserID`]: The user's IDs mentioned in this message."""

    replies: list[MessageID] = field(repr=True, kw_only=True)
    """List[:class:`.MessageID`]: The message's IDs this message is replying to."""

    def locally_update(self, data: PartialMessage, /) -> None:
        """Locally updates message with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if data.content is not UNDEFINED:
            self.content = data.content
        if data.edited_at is not UNDEFINED:
            self.edited_at = data.edited_at
        if data.embeds is not UNDEFINED:
            self.embeds = data.embeds

    def get_author(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user who sent this message, if it is cached."""
        return self.state.cache.get_user(self.author_id, caching._USER_REQUEST)

    async def resolve_author(self) -> User:
        """|coro|

        Retrieves the user who sent this message, from cache or API.

        Raises
        ------
        FetchError
            Retrieving the user failed.
        """
        return await USER_RESOLVER.resolve(self.state, self.author_id)


__all__ = (
    'Reply',
    'SystemMessage',
    'BaseMessage',
    'PartialMessage',
    'Message',
)
