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

import asyncio
import builtins
from inspect import isawaitable, signature
import logging
import typing

from .cache import _USER_REQUEST, Cache, MapCache
from .context_managers import Typing
from .core import (
    UNDEFINED,
    UndefinedOr,
    MemberID,
    resolve_id,
)
from .errors import OrphanPatchError, ProtocolDecodeError
from .events import BaseEvent
from .http import HTTPClient
from .resolve import (
    CHANNEL_RESOLVER,
    SERVER_RESOLVER,
    USER_RESOLVER,
    MEMBER_RESOLVER,
    MESSAGE_RESOLVER,
)
from .shard import EventHandler, Shard
from .state import State
from . import utils

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Generator, Mapping
    from types import TracebackType
    from typing_extensions import Self

    from . import raw
    from .channel import BaseChannel, Channel
    from .core import ChannelID, MessageID, ServerID, UserID
    from .events import (
        AuthenticatedEvent,
        ChannelCreateEvent,
        ChannelDeleteEvent,
        ChannelStartTypingEvent,
        ChannelStopTypingEvent,
        ChannelUpdateEvent,
        ErrorEvent,
        GroupRecipientAddEvent,
        GroupRecipientRemoveEvent,
        MessageAckEvent,
        MessageCreateEvent,
        MessageDeleteEvent,
        MessageUpdateEvent,
        PongEvent,
        ReadyEvent,
        ServerDeleteEvent,
        ServerMemberJoinEvent,
        ServerMemberLeaveEvent,
        ServerMemberUpdateEvent,
        ServerRoleDeleteEvent,
        ServerRoleUpdateEvent,
        ServerUpdateEvent,
        UserRelationshipEvent,
        UserUpdateEvent,
    )
    from .message import Message
    from .parser import Parser
    from .server import Member, Server
    from .user import User


_L = logging.getLogger(__name__)


class ClientEventHandler(EventHandler):
    """The default event handler for the client.

    Decodes every received message and dispatches resulting event.
    """

    __slots__ = ('_client', '_state')

    def __init__(self, client: Client) -> None:
        self._client = client
        self._state = client._state

    async def _handle_library_error(self, shard: Shard, payload: raw.ClientEvent, exc: Exception, name: str, /) -> None:
        try:
            r = self._client.on_library_error(shard, payload, exc)
            if isawaitable(r):
                await r
        except Exception:
            _L.exception('on_library_error (task: %s) raised an exception', name)

    def handle_raw(self, shard: Shard, payload: raw.ClientEvent, /) -> None:
        try:
            event = self._state.parser.parse_event(shard, payload)
        except ProtocolDecodeError as exc:
            if exc.tag == 'Ready':
                # This is fatal
                raise
            _L.warning('Skipping undecodable message: %s', exc)
            return

        try:
            self._client.dispatch(event)
        except Exception as exc:
            if _payload_type(payload) == 'Ready':
                raise

            name = f'robespierre-dispatch-{self._client._get_i()}'
            asyncio.create_task(self._handle_library_error(shard, payload, exc, name), name=name)


def _payload_type(payload: typing.Any, /) -> typing.Any:
    if isinstance(payload, dict):
        return payload.get('type')
    return None


EventT = typing.TypeVar('EventT', bound='BaseEvent')


def _parents_of(type: type[BaseEvent], /) -> tuple[type[BaseEvent], ...]:
    """Tuple[Type[:class:`.BaseEvent`], ...]: Returns parents of BaseEvent, including BaseEvent itself."""
    if type is BaseEvent:
        return (BaseEvent,)
    tmp: typing.Any = type.__mro__[:-1]
    return tmp


class EventSubscription(typing.Generic[EventT]):
    """Represents a event subscription.

    Attributes
    ----------
    client: :class:`Client`
        The client that this subscription is tied to.
    id: :class:`int`
        The ID of the subscription.
    callback: MaybeAwaitableFunc[[EventT], None]
        The callback.
    """

    __slots__ = (
        'client',
        'id',
        'callback',
        'event',
    )

    def __init__(
        self,
        *,
        client: Client,
        id: int,
        callback: utils.MaybeAwaitableFunc[[EventT], None],
        event: type[EventT],
    ) -> None:
        self.client: Client = client
        self.id: int = id
        self.callback: utils.MaybeAwaitableFunc[[EventT], None] = callback
        self.event: type[EventT] = event

    def __call__(self, arg: EventT, /) -> utils.MaybeAwaitable[None]:
        return self.callback(arg)

    async def _handle(self, arg: EventT, name: str, /) -> None:
        await self.client._run_callback(self.callback, arg, name)

    def remove(self) -> None:
        """Removes the event subscription."""
        self.client._handlers[self.event][0].pop(self.id, None)


class TemporarySubscription(typing.Generic[EventT]):
    """Represents a temporary event subscription."""

    __slots__ = (
        'client',
        'id',
        'event',
        'future',
        'check',
        'coro',
    )

    def __init__(
        self,
        *,
        client: Client,
        id: int,
        event: type[EventT],
        future: asyncio.Future[EventT],
        check: Callable[[EventT], utils.MaybeAwaitable[bool]],
        coro: Coroutine[typing.Any, typing.Any, EventT],
    ) -> None:
        self.client: Client = client
        self.id: int = id
        self.event: type[EventT] = event
        self.future: asyncio.Future[EventT] = future
        self.check: Callable[[EventT], utils.MaybeAwaitable[bool]] = check
        self.coro: Coroutine[typing.Any, typing.Any, EventT] = coro

    def __await__(self) -> Generator[typing.Any, typing.Any, EventT]:
        return self.coro.__await__()

    async def _handle(self, arg: EventT, name: str, /) -> bool:
        if self.future.done():
            # Timed out or cancelled
            return True
        try:
            can = self.check(arg)
            if isawaitable(can):
                can = await can

            if can:
                self.future.set_result(arg)
            return can
        except Exception as exc:
            _L.exception('Checker function (task: %s) raised an exception', name)
            if not self.future.done():
                self.future.set_exception(exc)
            return True

    def cancel(self) -> None:
        """Cancels the subscription."""
        self.future.cancel()
        self.client._handlers[self.event][1].pop(self.id, None)


_DEFAULT_HANDLERS = ({}, {})


class Client:
    """A Revolt client.

    Parameters
    ----------
    token: :class:`str`
        The bot or session token.
    bot: :class:`bool`
        Whether the token belongs to bot account. Defaults to ``True``.
    user_id: Optional[:class:`.UserID`]
        The ID of user the session token belongs to. Required for user accounts.
    cache: UndefinedOr[Optional[:class:`.Cache`]]
        The cache to use. Defaults to :class:`.MapCache`; pass ``None`` to disable caching.
    http_base: Optional[:class:`str`]
        The base URL of Revolt API.
    websocket_base: Optional[:class:`str`]
        The base URL of Revolt WebSocket.
    max_retries: Optional[:class:`int`]
        How many times to retry requests that were ratelimited.
    """

    __slots__ = (
        '_handlers',
        '_i',
        '_state',
        '_token',
        '_types',
        'bot',
        'closed',
    )

    def __init__(
        self,
        *,
        token: str = '',
        bot: bool = True,
        user_id: UserID | None = None,
        cache: Callable[[Client, State], UndefinedOr[Cache | None]] | UndefinedOr[Cache | None] = UNDEFINED,
        http_base: str | None = None,
        http: Callable[[Client, State], HTTPClient] | None = None,
        parser: Callable[[Client, State], Parser] | None = None,
        shard: Callable[[Client, State], Shard] | None = None,
        state: Callable[[Client], State] | State | None = None,
        websocket_base: str | None = None,
        max_retries: int | None = None,
    ) -> None:
        self.closed: bool = True
        # {Type[BaseEvent]: (subscriptions, temporary subscriptions)}
        self._handlers: dict[
            type[BaseEvent],
            tuple[
                dict[int, EventSubscription[BaseEvent]],
                dict[int, TemporarySubscription[BaseEvent]],
            ],
        ] = {}
        # {Type[BaseEvent]: Tuple[Type[BaseEvent], ...]}
        self._types: dict[type[BaseEvent], tuple[type[BaseEvent], ...]] = {}
        self._i = 0

        if state:
            if callable(state):
                self._state: State = state(self)
            else:
                self._state = state
        else:
            state = State()

            if callable(cache):
                cr = cache(self, state)
            else:
                cr = cache
            # UNDEFINED means default cache, None disables caching
            c = MapCache() if cr is UNDEFINED else cr

            if parser:
                state.setup(parser=parser(self, state))
            state.setup(
                http=(
                    http(self, state)
                    if http
                    else HTTPClient(
                        token,
                        base=http_base,
                        bot=bot,
                        max_retries=max_retries,
                        state=state,
                    )
                ),
            )
            if c is not None:
                state.setup(cache=c)
            self._state = state
            state.setup(
                shard=(
                    shard(self, state)
                    if shard
                    else Shard(
                        token,
                        base=websocket_base,
                        bot=bot,
                        handler=ClientEventHandler(self),
                        state=state,
                        user_id=user_id,
                    )
                )
            )
        self._token: str = token
        self.bot: bool = bot

    def _get_i(self) -> int:
        self._i += 1
        return self._i

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException | None,
        traceback: TracebackType | None,
        /,
    ) -> None:
        await self.close()

    async def on_user_error(self, event: BaseEvent) -> None:
        """Handles user errors that came from handlers.
        You can get current exception being raised via :func:`sys.exc_info`.

        By default, this logs exception.
        """
        _L.exception(
            'One of %s handlers raised an exception',
            event.__class__.__name__,
        )

    async def on_library_error(self, _shard: Shard, payload: raw.ClientEvent, exc: Exception, /) -> None:
        """Handles library errors. By default, this logs exception.

        .. note::
            This won't be called if handling ``Ready`` will raise a exception as it is fatal.
        """

        _L.exception('%s handler raised an exception', _payload_type(payload), exc_info=exc)

    async def _run_callback(
        self, callback: Callable[[EventT], utils.MaybeAwaitable[None]], arg: EventT, name: str, /
    ) -> None:
        try:
            r = callback(arg)
            if isawaitable(r):
                await r
        except Exception:
            try:
                r = self.on_user_error(arg)
                if isawaitable(r):
                    await r
            except Exception:
                _L.exception('on_user_error (task: %s) raised an exception', name)

    def _apply(self, event: BaseEvent, /) -> None:
        try:
            event.before_dispatch()
        except OrphanPatchError as exc:
            # Nothing to patch, handlers still receive the event
            _L.debug('Not updating cache on %s: %s', event.__class__.__name__, exc)
            return
        _L.debug('Processing %s', event.__class__.__name__)
        event.process()

    async def _dispatch(self, types: tuple[type[BaseEvent], ...], event: BaseEvent, name: str, /) -> None:
        for type in types:
            handlers, temporary_handlers = self._handlers.get(type, _DEFAULT_HANDLERS)
            if _L.isEnabledFor(logging.DEBUG):
                _L.debug(
                    'Dispatching %s (%i handlers, originating from %s)',
                    type.__name__,
                    len(handlers),
                    event.__class__.__name__,
                )

            remove = []
            for handler in list(temporary_handlers.values()):
                if await handler._handle(event, name):
                    remove.append(handler.id)

            for id in remove:
                temporary_handlers.pop(id, None)

            for handler in list(handlers.values()):
                await handler._handle(event, name)

            event_name: str | None = getattr(type, 'event_name', None)
            if event_name:
                handler = getattr(self, 'on_' + event_name, None)
                if handler:
                    await self._run_callback(handler, event, name)

        handler = getattr(self, 'on_event', None)
        if handler:
            await self._run_callback(handler, event, name)

    def dispatch(self, event: BaseEvent, /) -> asyncio.Task[None]:
        """Dispatches a event.

        The event is applied to cache immediately, so events are applied in order
        they were received. Subscribers are then invoked in a separate task.

        Examples
        --------

        Dispatch a event when someone mentions the bot: ::

            from attrs import define, field
            import robespierre

            # ...


            @define(slots=True)
            class MentionEvent(robespierre.BaseEvent):
                message: robespierre.Message = field(repr=True, kw_only=True)


            @client.on(robespierre.MessageCreateEvent)
            async def on_message_create(event):
                message = event.message
                if client.state.me_id in message.mentions:
                    # Block until event gets fully handled.
                    await client.dispatch(MentionEvent(message=message))

        Parameters
        ----------
        event: :class:`.BaseEvent`
            The event to dispatch.

        Returns
        -------
        :class:`asyncio.Task`
            The asyncio task running subscribers.
        """

        self._apply(event)

        et = builtins.type(event)
        try:
            types = self._types[et]
        except KeyError:
            types = self._types[et] = _parents_of(et)

        name = f'robespierre-dispatch-{self._get_i()}'
        return asyncio.create_task(self._dispatch(types, event, name), name=name)

    def subscribe(
        self,
        event: type[EventT],
        /,
        callback: utils.MaybeAwaitableFunc[[EventT], None],
    ) -> EventSubscription[EventT]:
        """Subscribes to event.

        Parameters
        ----------
        event: Type[EventT]
            The type of the event.
        callback: MaybeAwaitableFunc[[EventT], None]
            The callback for the event.
        """
        sub: EventSubscription[EventT] = EventSubscription(
            client=self,
            id=self._get_i(),
            callback=callback,
            event=event,
        )

        # The actual generic of value type is same as key
        try:
            self._handlers[event][0][sub.id] = sub  # type: ignore
        except KeyError:
            self._handlers[event] = ({sub.id: sub}, {})  # type: ignore
        return sub

    def unsubscribe(
        self,
        event: type[EventT],
        callback: utils.MaybeAwaitableFunc[[EventT], None],
        /,
    ) -> list[EventSubscription[EventT]]:
        try:
            subscriptions = self._handlers[event][0]
        except KeyError:
            return []

        removed = [k for k, subscription in subscriptions.items() if subscription.callback == callback]
        return [subscriptions.pop(k) for k in removed]  # type: ignore

    def listen(
        self,
        event: type[EventT] | None = None,
        /,
    ) -> Callable[
        [utils.MaybeAwaitableFunc[[EventT], None]],
        EventSubscription[EventT],
    ]:
        """Register an event listener.

        There is alias called :meth:`on`.

        Examples
        --------

        Ping Pong: ::

            @client.listen()
            async def on_message_create(event: robespierre.MessageCreateEvent):
                message = event.message
                if message.content == '!ping':
                    await message.reply('pong!')


            # It returns :class:`EventSubscription`, so you can do ``on_message_create.remove()``

        Parameters
        ----------
        event: Optional[Type[EventT]]
            The event to listen to. If not provided, the annotation of first parameter is used.
        """

        def decorator(callback: utils.MaybeAwaitableFunc[[EventT], None], /) -> EventSubscription[EventT]:
            tmp = event

            if tmp is None:
                fs = signature(callback, eval_str=True)
                params = list(fs.parameters.values())
                if not params or params[0].annotation is params[0].empty:
                    raise TypeError('Cannot use listen() without event annotation type')
                tmp = params[0].annotation

            return self.subscribe(tmp, callback)  # type: ignore

        return decorator

    on = listen

    def wait_for(
        self,
        event: type[EventT],
        /,
        *,
        check: Callable[[EventT], utils.MaybeAwaitable[bool]] | None = None,
        timeout: float | None = None,
    ) -> TemporarySubscription[EventT]:
        """|coro|

        Waits for an event to be dispatched.

        This function returns the **first event that meets the requirements**.

        Examples
        --------

        Waiting for a user reply: ::

            @client.on(robespierre.MessageCreateEvent)
            async def on_message_create(event):
                message = event.message
                if message.content.startswith('$greet'):
                    await message.reply('Say hello!')

                    def check(event):
                        return event.message.content == 'hello' and event.message.channel_id == message.channel_id

                    reply = await client.wait_for(robespierre.MessageCreateEvent, check=check)
                    await reply.message.reply('Hello!')

        Parameters
        ------------
        event: Type[EventT]
            The event to wait for.
        check: Optional[Callable[[EventT], :class:`bool`]]
            A predicate to check what to wait for.
        timeout: Optional[:class:`float`]
            The number of seconds to wait before timing out and raising
            :exc:`asyncio.TimeoutError`.

        Raises
        -------
        asyncio.TimeoutError
            If a timeout is provided and it was reached.

        Returns
        --------
        :class:`TemporarySubscription`
            The subscription. This can be ``await``'ed.
        """

        if check is None:
            check = lambda _, /: True

        future = asyncio.get_running_loop().create_future()

        coro = asyncio.wait_for(future, timeout=timeout)
        sub = TemporarySubscription(
            client=self,
            id=self._get_i(),
            event=event,
            future=future,
            check=check,
            coro=coro,
        )

        try:
            self._handlers[event][1][sub.id] = sub  # type: ignore
        except KeyError:
            self._handlers[event] = ({}, {sub.id: sub})  # type: ignore
        return sub

    def subscriptions_for(
        self, event: type[EventT], /, *, include_subclasses: bool = False
    ) -> list[EventSubscription[EventT]]:
        """List[EventSubscription[EventT]]: Returns the subscriptions for event.

        Parameters
        ----------
        event: Type[EventT]
            The event to get subscriptions to.
        include_subclasses: class:`bool`
            Whether to include subclassed events. Defaults to ``False``.
        """
        if include_subclasses:
            ret = []
            for k, v in self._handlers.items():
                if issubclass(k, event):
                    ret.extend(v[0].values())
            return ret

        try:
            return list(self._handlers[event][0].values())  # type: ignore
        except KeyError:
            return []

    @property
    def http(self) -> HTTPClient:
        """:class:`.HTTPClient`: The HTTP client."""
        return self._state.http

    @property
    def shard(self) -> Shard:
        """:class:`.Shard`: The Revolt WebSocket client."""
        return self._state.shard

    @property
    def state(self) -> State:
        """:class:`.State`: The controller for all entities and components."""
        return self._state

    @property
    def me(self) -> User | None:
        """Optional[:class:`.User`]: The currently logged in user. ``None`` if not logged in or not cached."""
        return self._state.me

    @property
    def system(self) -> User:
        """:class:`.User`: The Revolt sentinel user."""
        return self._state.system

    @property
    def channels(self) -> Mapping[ChannelID, Channel]:
        """Mapping[:class:`.ChannelID`, :class:`.Channel`]: Mapping of cached channels."""
        return self._state.cache.get_channels_mapping()

    @property
    def servers(self) -> Mapping[ServerID, Server]:
        """Mapping[:class:`.ServerID`, :class:`.Server`]: Mapping of cached servers."""
        return self._state.cache.get_servers_mapping()

    @property
    def users(self) -> Mapping[UserID, User]:
        """Mapping[:class:`.UserID`, :class:`.User`]: Mapping of cached users."""
        return self._state.cache.get_users_mapping()

    def get_channel(self, channel_id: ChannelID, /) -> Channel | None:
        """Retrieves a channel from cache.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel ID.

        Returns
        -------
        Optional[:class:`.Channel`]
            The channel or ``None`` if not found.
        """
        return self._state.cache.get_channel(channel_id, _USER_REQUEST)

    def get_server(self, server_id: ServerID, /) -> Server | None:
        """Retrieves a server from cache.

        Parameters
        ----------
        server_id: :class:`.ServerID`
            The server ID.

        Returns
        -------
        Optional[:class:`.Server`]
            The server or ``None`` if not found.
        """
        return self._state.cache.get_server(server_id, _USER_REQUEST)

    def get_user(self, user_id: UserID, /) -> User | None:
        """Retrieves a user from cache.

        Parameters
        ----------
        user_id: :class:`.UserID`
            The user ID.

        Returns
        -------
        Optional[:class:`.User`]
            The user or ``None`` if not found.
        """
        return self._state.cache.get_user(user_id, _USER_REQUEST)

    def get_member(self, server_id: ServerID, user_id: UserID, /) -> Member | None:
        """Optional[:class:`.Member`]: Retrieves a member from cache."""
        return self._state.cache.get_member(MemberID(server=server_id, user=user_id), _USER_REQUEST)

    def get_message(self, channel_id: ChannelID, message_id: MessageID, /) -> Message | None:
        """Optional[:class:`.Message`]: Retrieves a message from cache."""
        return self._state.cache.get_message(channel_id, message_id, _USER_REQUEST)

    async def resolve_channel(self, channel_id: ChannelID, /) -> Channel:
        """|coro|

        Retrieves a channel from cache, or from the API if it is not cached.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel ID.

        Raises
        ------
        FetchError
            The channel is not cached and retrieving it failed.

        Returns
        -------
        :class:`.Channel`
            The channel.
        """
        return await CHANNEL_RESOLVER.resolve(self._state, channel_id)

    async def resolve_server(self, server_id: ServerID, /) -> Server:
        """|coro|

        Retrieves a server from cache, or from the API if it is not cached.

        Raises
        ------
        FetchError
            The server is not cached and retrieving it failed.
        """
        return await SERVER_RESOLVER.resolve(self._state, server_id)

    async def resolve_user(self, user_id: UserID, /) -> User:
        """|coro|

        Retrieves a user from cache, or from the API if it is not cached.

        Raises
        ------
        FetchError
            The user is not cached and retrieving it failed.
        """
        return await USER_RESOLVER.resolve(self._state, user_id)

    async def resolve_member(self, server_id: ServerID, user_id: UserID, /) -> Member:
        """|coro|

        Retrieves a server member from cache, or from the API if it is not cached.

        Raises
        ------
        FetchError
            The member is not cached and retrieving it failed.
        """
        return await MEMBER_RESOLVER.resolve(self._state, MemberID(server=server_id, user=user_id))

    async def resolve_message(self, channel_id: ChannelID, message_id: MessageID, /) -> Message:
        """|coro|

        Retrieves a message from cache, or from the API if it is not cached.

        Raises
        ------
        FetchError
            The message is not cached and retrieving it failed.
        """
        return await MESSAGE_RESOLVER.resolve(self._state, (channel_id, message_id))

    async def send_message(
        self,
        channel: ChannelID | BaseChannel,
        content: str,
        /,
        *,
        nonce: str | None = None,
    ) -> Message:
        """|coro|

        Sends a message to the given channel. Shortcut to :meth:`.HTTPClient.send_message`.
        """
        return await self.http.send_message(resolve_id(channel), content, nonce=nonce)

    async def start(self) -> None:
        """|coro|

        Starts up the client. Returns once the connection is closed.

        Raises
        ------
        AuthenticationError
            The token is invalid.
        ConnectError
            Connecting to Revolt WebSocket failed too many times.
        """
        self.closed = False
        await self._state.shard.connect()

    async def close(self, *, http: bool = True, cleanup_websocket: bool = True) -> None:
        """|coro|

        Closes all HTTP sessions, and websocket connections.
        """
        if self.closed:
            return
        self.closed = True

        if not self.shard._closed:
            await self.shard.close()
        if cleanup_websocket:
            await self.shard.cleanup()

        if http:
            await self.http.cleanup()

    def run(
        self,
        *,
        log_handler: UndefinedOr[logging.Handler | None] = UNDEFINED,
        log_formatter: UndefinedOr[logging.Formatter] = UNDEFINED,
        log_level: UndefinedOr[int] = UNDEFINED,
        root_logger: bool = False,
    ) -> None:
        """A blocking call that abstracts away the event loop
        initialisation from you.

        This function also sets up the logging library, unless ``None`` is passed
        as ``log_handler``.

        Parameters
        -----------
        log_handler: Optional[:class:`logging.Handler`]
            The log handler to use for the library's logger. Defaults to :class:`logging.StreamHandler`.
        log_formatter: :class:`logging.Formatter`
            The formatter to use with the given log handler.
        log_level: :class:`int`
            The default log level for the library's logger. Defaults to ``logging.INFO``.
        root_logger: :class:`bool`
            Whether to set up the root logger rather than the library logger. Defaults to ``False``.
        """
        if not self._token:
            raise TypeError('No token was provided')

        async def runner():
            try:
                await self.start()
            finally:
                await self.close()

        if log_handler is not None:
            utils.setup_logging(
                handler=log_handler,
                formatter=log_formatter,
                level=log_level,
                root=root_logger,
            )

        try:
            asyncio.run(runner())
        except KeyboardInterrupt:
            # `asyncio.run` handles the loop cleanup
            return

    if typing.TYPE_CHECKING:

        def on_event(self, arg: BaseEvent, /) -> utils.MaybeAwaitable[None]: ...

        def on_error(self, arg: ErrorEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_authenticated(self, arg: AuthenticatedEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_pong(self, arg: PongEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_ready(self, arg: ReadyEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_create(self, arg: MessageCreateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_update(self, arg: MessageUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_delete(self, arg: MessageDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_channel_create(self, arg: ChannelCreateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_channel_update(self, arg: ChannelUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_channel_delete(self, arg: ChannelDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_recipient_add(self, arg: GroupRecipientAddEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_recipient_remove(self, arg: GroupRecipientRemoveEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_channel_start_typing(self, arg: ChannelStartTypingEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_channel_stop_typing(self, arg: ChannelStopTypingEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_message_ack(self, arg: MessageAckEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_update(self, arg: ServerUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_delete(self, arg: ServerDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_update(self, arg: ServerMemberUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_join(self, arg: ServerMemberJoinEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_member_leave(self, arg: ServerMemberLeaveEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_role_update(self, arg: ServerRoleUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_server_role_delete(self, arg: ServerRoleDeleteEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_user_update(self, arg: UserUpdateEvent, /) -> utils.MaybeAwaitable[None]: ...
        def on_user_relationship(self, arg: UserRelationshipEvent, /) -> utils.MaybeAwaitable[None]: ...

    # Shadows the typing module in class body, so it must stay last
    def typing(self, channel: ChannelID | BaseChannel, /) -> Typing:
        """Returns an asynchronous context manager that shows typing indicator in channel.

        Example: ::

            async with client.typing(channel_id):
                await asyncio.sleep(3)
                await client.send_message(channel_id, 'Done thinking!')
        """
        return Typing(channel_id=resolve_id(channel), shard=self._state.shard)


__all__ = (
    'ClientEventHandler',
    'EventSubscription',
    'TemporarySubscription',
    'Client',
)
