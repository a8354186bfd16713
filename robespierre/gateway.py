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
import typing

from .core import ChannelID, UserID

if typing.TYPE_CHECKING:
    from . import raw


@define(slots=True, frozen=True)
class Authenticate:
    """Authenticates a user session."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The ID of user the session belongs to."""

    session_token: str = field(repr=False, kw_only=True)
    """:class:`str`: The session token."""


@define(slots=True, frozen=True)
class AuthenticateBot:
    """Authenticates a bot. Sent with same ``Authenticate`` type as user sessions."""

    token: str = field(repr=False, kw_only=True)
    """:class:`str`: The bot token."""


@define(slots=True, frozen=True)
class BeginTyping:
    """Tells other users that we started typing in channel."""

    channel: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID."""


@define(slots=True, frozen=True)
class EndTyping:
    """Tells other users that we stopped typing in channel."""

    channel: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID."""


@define(slots=True, frozen=True)
class Ping:
    """Keeps the connection alive. The server replies with a Pong carrying same ``time``."""

    time: int = field(repr=True, kw_only=True)
    """:class:`int`: The arbitrary value echoed back by the server, must fit into 32 bits."""

    # Some server versions reject Ping messages without this
    data: tuple[int] = field(repr=True, kw_only=True, default=(0,))
    """Tuple[:class:`int`]: The single-element payload."""


ServerEvent = typing.Union[Authenticate, AuthenticateBot, BeginTyping, EndTyping, Ping]


def encode_server_event(event: ServerEvent, /) -> raw.ServerEvent:
    """Converts an outgoing message into JSON-serializable payload.

    Parameters
    ----------
    event: :class:`ServerEvent`
        The message to encode.

    Returns
    -------
    Dict[:class:`str`, Any]
        The payload that can be sent over WebSocket.
    """
    if isinstance(event, Authenticate):
        return {'type': 'Authenticate', 'user_id': event.user_id, 'session_token': event.session_token}
    elif isinstance(event, AuthenticateBot):
        return {'type': 'Authenticate', 'token': event.token}
    elif isinstance(event, BeginTyping):
        return {'type': 'BeginTyping', 'channel': event.channel}
    elif isinstance(event, EndTyping):
        return {'type': 'EndTyping', 'channel': event.channel}
    elif isinstance(event, Ping):
        if not 0 <= event.time <= 0xFFFFFFFF:
            raise ValueError(f'Ping time must fit into 32 bits, got {event.time}')
        return {'type': 'Ping', 'time': event.time, 'data': list(event.data)}
    raise TypeError(f'Cannot encode {event.__class__.__name__}')


__all__ = (
    'Authenticate',
    'AuthenticateBot',
    'BeginTyping',
    'EndTyping',
    'Ping',
    'ServerEvent',
    'encode_server_event',
)
