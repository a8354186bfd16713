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

from abc import ABC, abstractmethod
import aiohttp
import asyncio
from inspect import isawaitable
import logging
import typing

from . import utils
from .core import ChannelID, UserID, resolve_id, __version__ as version
from .errors import RobespierreError, ShardClosedError, AuthenticationError, ConnectError
from .gateway import Authenticate, AuthenticateBot, BeginTyping, EndTyping, Ping, ServerEvent, encode_server_event

if typing.TYPE_CHECKING:
    from datetime import datetime

    from . import raw
    from .channel import BaseChannel
    from .state import State

_L = logging.getLogger(__name__)


class Close(Exception):
    __slots__ = ()


class Reconnect(Exception):
    __slots__ = ()


class EventHandler(ABC):
    """A handler for shard events."""

    __slots__ = ()

    @abstractmethod
    def handle_raw(self, shard: Shard, payload: raw.ClientEvent, /) -> utils.MaybeAwaitable[None]:
        """Handles dispatched event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard that received the event.
        payload: Dict[:class:`str`, Any]
            The received event payload.
        """
        ...

    def before_connect(self, shard: Shard, /) -> utils.MaybeAwaitable[None]:
        """Called before connecting to Revolt."""
        ...

    def after_connect(self, shard: Shard, socket: aiohttp.ClientWebSocketResponse, /) -> utils.MaybeAwaitable[None]:
        """Called when successfully connected to Revolt WebSocket.

        Parameters
        ----------
        socket: :class:`aiohttp.ClientWebSocketResponse`
            The connected WebSocket.
        """
        ...


DEFAULT_SHARD_USER_AGENT = f'robespierre Shard client (https://github.com/MCausc78/robespierre, {version})'

# Ping times are echoed back as 32-bit unsigned integers
_PING_TIME_MODULO = 1 << 32


class Shard:
    """Implements Revolt WebSocket client.

    Attributes
    ----------
    base: :class:`str`
        The base WebSocket URL.
    bot: :class:`bool`
        Whether the token belongs to bot account. Defaults to ``True``.
    connect_delay: Optional[:class:`float`]
        The duration in seconds to sleep when reconnecting to WebSocket due to aiohttp errors. Defaults to 2.
    handler: Optional[:class:`.EventHandler`]
        The handler that receives events. Defaults to ``None`` if not provided.
    heartbeat_interval: :class:`float`
        The duration in seconds between pings. Defaults to 30.
    last_ping_at: Optional[:class:`~datetime.datetime`]
        When the shard sent ping.
    last_pong_at: Optional[:class:`~datetime.datetime`]
        When the shard received response to ping.
    reconnect_on_timeout: :class:`bool`
        Whether to reconnect when received pong time is not equal to last ping time. Defaults to ``True``.
    retries: :class:`int`
        How many times to try connecting before giving up.
    state: :class:`State`
        The state.
    token: :class:`str`
        The shard token. May be empty if not started.
    user_id: Optional[:class:`.UserID`]
        The ID of user the session token belongs to. Required when :attr:`bot` is ``False``.
    user_agent: :class:`str`
        The HTTP user agent used when connecting to WebSocket.
    """

    _socket: aiohttp.ClientWebSocketResponse | None

    __slots__ = (
        '_closed',
        '_heartbeat_sequence',
        '_last_close_code',
        '_session',
        '_socket',
        'base',
        'bot',
        'connect_delay',
        'handler',
        'heartbeat_interval',
        'last_ping_at',
        'last_pong_at',
        'reconnect_on_timeout',
        'retries',
        'state',
        'token',
        'user_id',
        'user_agent',
    )

    def __init__(
        self,
        token: str,
        *,
        base: str | None = None,
        bot: bool = True,
        connect_delay: float | None = 2,
        handler: EventHandler | None = None,
        heartbeat_interval: float = 30.0,
        reconnect_on_timeout: bool = True,
        retries: int | None = None,
        session: utils.MaybeAwaitableFunc[[Shard], aiohttp.ClientSession] | aiohttp.ClientSession | None = None,
        state: State,
        user_id: UserID | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._closed: bool = False
        self._heartbeat_sequence: int = 0
        self._last_close_code: int | None = None
        self._session = session
        self._socket: aiohttp.ClientWebSocketResponse | None = None
        self.base: str = base or 'wss://ws.revolt.chat/'
        self.bot: bool = bot
        self.connect_delay: int | float | None = connect_delay
        self.handler: EventHandler | None = handler
        self.heartbeat_interval: float = heartbeat_interval
        self.last_ping_at: datetime | None = None
        self.last_pong_at: datetime | None = None
        self.reconnect_on_timeout: bool = reconnect_on_timeout
        self.retries: int = retries or 150
        self.state: State = state
        self.token: str = token
        self.user_id: UserID | None = user_id
        self.user_agent: str = user_agent or DEFAULT_SHARD_USER_AGENT

    def is_closed(self) -> bool:
        return self._closed and not self._socket

    async def cleanup(self) -> None:
        """|coro|

        Closes the aiohttp session.
        """
        if self._session is not None and not callable(self._session):
            await self._session.close()

    async def close(self) -> None:
        """|coro|

        Closes the connection to Revolt.
        """
        if self._closed:
            raise ShardClosedError('Already closed')
        self._closed = True
        if self._socket:
            await self._socket.close(code=1000)

    @property
    def socket(self) -> aiohttp.ClientWebSocketResponse:
        """:class:`aiohttp.ClientWebSocketResponse`: The current WebSocket connection."""
        if self._socket is None:
            raise TypeError('No websocket')
        return self._socket

    def _authenticate_message(self) -> ServerEvent:
        if self.bot:
            return AuthenticateBot(token=self.token)
        if self.user_id is None:
            raise TypeError('Session authentication requires user_id')
        return Authenticate(user_id=self.user_id, session_token=self.token)

    async def authenticate(self) -> None:
        """|coro|

        Authenticates the currently connected WebSocket. This is called right after successful WebSocket handshake.
        """
        await self.send(self._authenticate_message())

    async def ping(self) -> None:
        """|coro|

        Pings the WebSocket.
        """
        self._heartbeat_sequence = (self._heartbeat_sequence + 1) % _PING_TIME_MODULO
        await self.send(Ping(time=self._heartbeat_sequence))
        self.last_ping_at = utils.utcnow()

    async def begin_typing(self, channel: ChannelID | BaseChannel, /) -> None:
        """|coro|

        Begins typing in a channel.

        Parameters
        ----------
        channel: Union[:class:`.ChannelID`, :class:`.BaseChannel`]
            The channel to begin typing in.
        """
        await self.send(BeginTyping(channel=resolve_id(channel)))

    async def end_typing(self, channel: ChannelID | BaseChannel, /) -> None:
        """|coro|

        Ends typing in a channel.

        Parameters
        ----------
        channel: Union[:class:`.ChannelID`, :class:`.BaseChannel`]
            The channel to end typing in.
        """
        await self.send(EndTyping(channel=resolve_id(channel)))

    async def send(self, event: ServerEvent, /) -> None:
        """|coro|

        Sends a message to Revolt.

        Parameters
        ----------
        event: :class:`.ServerEvent`
            The message to send.
        """
        d = encode_server_event(event)
        if d['type'] != 'Authenticate':
            _L.debug('sending %s', d)
        await self.socket.send_str(utils.to_json(d))

    async def recv(self) -> typing.Any:
        try:
            message = await self.socket.receive()
        except (KeyboardInterrupt, asyncio.CancelledError):
            raise Close

        if message.type in (
            aiohttp.WSMsgType.CLOSE,
            aiohttp.WSMsgType.CLOSED,
            aiohttp.WSMsgType.CLOSING,
        ):
            self._last_close_code = data = self.socket.close_code
            _L.debug('WebSocket closed with %s (closed: %s)', data, self._closed)
            if self._closed:
                raise Close
            await asyncio.sleep(0.5)
            raise Reconnect

        if message.type is aiohttp.WSMsgType.ERROR:
            _L.debug('Received invalid WebSocket payload. Reconnecting.')
            raise Reconnect

        if message.type is not aiohttp.WSMsgType.TEXT:
            _L.debug(
                'Received unknown message type: %s (expected TEXT). Reconnecting.',
                message.type,
            )
            raise Reconnect

        k = utils.from_json(message.data)
        if not isinstance(k, dict) or k.get('type') != 'Ready':
            _L.debug('Received %s', k)
        return k

    def get_headers(self) -> dict[str, str]:
        """Dict[:class:`str`, :class:`str`]: The headers to use when connecting to WebSocket."""
        return {'User-Agent': self.user_agent}

    async def _heartbeat(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            await self.ping()

    async def ws_connect(
        self, session: aiohttp.ClientSession, url: str, /, *, headers: dict[str, str], params: dict[str, str]
    ) -> aiohttp.ClientWebSocketResponse:
        """|coro|

        Start a WebSocket connection.

        Parameters
        ----------
        session: :class:`aiohttp.ClientSession`
            The session to use when connecting.
        url: :class:`str`
            The URL to connect to.
        headers: Dict[:class:`str`, :class:`str`]
            The HTTP headers.
        params: Dict[:class:`str`, :class:`str`]
            The HTTP query string parameters.

        Returns
        -------
        :class:`aiohttp.ClientWebSocketResponse`
            The WebSocket connection.
        """
        return await session.ws_connect(
            url,
            headers=headers,
            params=params,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        session = self._session
        if session is None:
            session = aiohttp.ClientSession()
        elif callable(session):
            session = await utils.maybe_coroutine(session, self)
            # detect recursion
            if callable(session):
                raise TypeError(f'Expected aiohttp.ClientSession, not {type(session)!r}')
        # Do not call factory on future requests
        self._session = session
        return session

    async def _socket_connect(self) -> aiohttp.ClientWebSocketResponse:
        session = await self._get_session()

        params = {'version': '1', 'format': 'json'}
        errors: list[Exception] = []

        i = 0
        _L.debug('Connecting to %s', self.base)

        headers = self.get_headers()
        while i < self.retries:
            try:
                return await self.ws_connect(
                    session,
                    self.base,
                    headers=headers,
                    params=params,
                )
            except aiohttp.WSServerHandshakeError as exc:
                _L.debug('Server replied with %i', exc.status)
                if exc.status in (502, 525):
                    i += 1
                    errors.append(exc)
                    await asyncio.sleep(1.5)
                    continue
                raise
            except (OSError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
                i += 1
                errors.append(exc)
                _L.warning('Connection failed on %i attempt: %r', i, exc)
                if self.connect_delay is not None:
                    await asyncio.sleep(self.connect_delay)
        raise ConnectError(self.retries, errors)

    async def _close_socket(self, socket: aiohttp.ClientWebSocketResponse, /) -> None:
        if socket.closed:
            return
        try:
            await socket.close()
        except (OSError, aiohttp.ClientError) as exc:
            _L.warning('failed to close websocket', exc_info=exc)

    async def connect(self) -> None:
        """|coro|

        Starts the WebSocket lifecycle.

        Raises
        ------
        AuthenticationError
            Revolt rejected the credentials.
        ConnectError
            Connecting failed too many times.
        """
        if self._socket:
            raise RobespierreError('The connection is already open.')
        self._closed = False
        while not self._closed:
            if self.handler:
                r = self.handler.before_connect(self)
                if isawaitable(r):
                    await r

            socket = await self._socket_connect()
            if self.handler:
                r = self.handler.after_connect(self, socket)
                if isawaitable(r):
                    await r

            self._last_close_code = None
            self._socket = socket

            try:
                await self.authenticate()
                message = await self.recv()
            except Reconnect:
                self._socket = None
                await self._close_socket(socket)
                continue
            except Close:
                self._socket = None
                await self._close_socket(socket)
                return

            if not isinstance(message, dict) or message.get('type') != 'Authenticated':
                self._socket = None
                await self._close_socket(socket)
                # {"type": "Error", "error": "InvalidSession"}
                raise AuthenticationError(message)

            await self._handle(message)

            heartbeat_task = asyncio.create_task(self._heartbeat())
            try:
                reconnect = await self._loop()
            finally:
                heartbeat_task.cancel()
                self._socket = None
                await self._close_socket(socket)

            if not reconnect:
                break
            await asyncio.sleep(1)
        self._last_close_code = None

    async def _loop(self) -> bool:
        # Returns whether the shard should reconnect
        while not self._closed:
            try:
                message = await self.recv()
            except Close:
                return False
            except Reconnect:
                return True
            except ValueError as exc:
                _L.warning('Received malformed JSON, skipping: %s', exc)
                continue

            if not await self._handle(message):
                return True
        return False

    async def _handle(self, payload: typing.Any, /) -> bool:
        if isinstance(payload, dict) and payload.get('type') == 'Pong':
            time = payload.get('time')
            if time != self._heartbeat_sequence:
                if self.reconnect_on_timeout:
                    _L.error('missed Pong, expected %s, got %s', self._heartbeat_sequence, time)
                    return False
                _L.warning('missed Pong, expected %s, got %s', self._heartbeat_sequence, time)
            else:
                self.last_pong_at = utils.utcnow()

        if self.handler is not None:
            r = self.handler.handle_raw(self, payload)
            if isawaitable(r):
                await r
        return True


__all__ = ('Close', 'Reconnect', 'EventHandler', 'DEFAULT_SHARD_USER_AGENT', 'Shard')
