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

import logging
import typing

from .cache import _LIBRARY_REQUEST, _USER_REQUEST

if typing.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .cache import BaseCacheContext, Cache
    from .channel import Channel
    from .core import ChannelID, MemberID, MessageID, ServerID, UserID
    from .http import HTTPClient
    from .message import Message
    from .server import Member, Server
    from .state import State
    from .user import User

_L = logging.getLogger(__name__)

K = typing.TypeVar('K')
E = typing.TypeVar('E')


class Resolver(typing.Generic[K, E]):
    """Retrieves an entity from cache, falling back to the API on a miss.

    Entities retrieved from the API are committed to the cache before being returned.
    Concurrent resolutions of the same key may both hit the API, in which case
    the last commit wins.

    Parameters
    ----------
    name: :class:`str`
        The entity kind, used in logs.
    get: Callable[[:class:`.Cache`, K, :class:`.BaseCacheContext`], Optional[E]]
        Retrieves an entity from cache.
    commit: Callable[[:class:`.Cache`, E, :class:`.BaseCacheContext`], E]
        Stores an entity in cache and returns it.
    fetch: Callable[[:class:`.HTTPClient`, K], Awaitable[E]]
        Retrieves an entity from the API.
    """

    __slots__ = ('name', 'get', 'commit', 'fetch')

    def __init__(
        self,
        name: str,
        *,
        get: Callable[[Cache, K, BaseCacheContext], typing.Optional[E]],
        commit: Callable[[Cache, E, BaseCacheContext], E],
        fetch: Callable[[HTTPClient, K], Awaitable[E]],
    ) -> None:
        self.name: str = name
        self.get = get
        self.commit = commit
        self.fetch = fetch

    def __repr__(self) -> str:
        return f'<Resolver name={self.name!r}>'

    def get_cached(self, state: State, key: K, /) -> typing.Optional[E]:
        """Optional[E]: Retrieves an entity from cache only."""
        return self.get(state.cache, key, _USER_REQUEST)

    async def resolve(self, state: State, key: K, /) -> E:
        """|coro|

        Retrieves an entity from cache, or from the API if it is not cached.

        Raises
        ------
        FetchError
            The entity is not cached and retrieving it from the API failed.
        """
        entity = self.get(state.cache, key, _USER_REQUEST)
        if entity is not None:
            return entity

        _L.debug('%s %r is not cached, fetching', self.name, key)
        entity = await self.fetch(state.http, key)
        return self.commit(state.cache, entity, _LIBRARY_REQUEST)


def _get_message(cache: Cache, key: tuple[ChannelID, MessageID], ctx: BaseCacheContext, /) -> typing.Optional[Message]:
    return cache.get_message(key[0], key[1], ctx)


async def _fetch_message(http: HTTPClient, key: tuple[ChannelID, MessageID], /) -> Message:
    return await http.get_message(key[0], key[1])


CHANNEL_RESOLVER: Resolver[ChannelID, Channel] = Resolver(
    'channel',
    get=lambda cache, key, ctx: cache.get_channel(key, ctx),
    commit=lambda cache, entity, ctx: cache.commit_channel(entity, ctx),
    fetch=lambda http, key: http.get_channel(key),
)
SERVER_RESOLVER: Resolver[ServerID, Server] = Resolver(
    'server',
    get=lambda cache, key, ctx: cache.get_server(key, ctx),
    commit=lambda cache, entity, ctx: cache.commit_server(entity, ctx),
    fetch=lambda http, key: http.get_server(key),
)
USER_RESOLVER: Resolver[UserID, User] = Resolver(
    'user',
    get=lambda cache, key, ctx: cache.get_user(key, ctx),
    commit=lambda cache, entity, ctx: cache.commit_user(entity, ctx),
    fetch=lambda http, key: http.get_user(key),
)
MEMBER_RESOLVER: Resolver[MemberID, Member] = Resolver(
    'member',
    get=lambda cache, key, ctx: cache.get_member(key, ctx),
    commit=lambda cache, entity, ctx: cache.commit_member(entity, ctx),
    fetch=lambda http, key: http.get_member(key.server, key.user),
)
MESSAGE_RESOLVER: Resolver[tuple[ChannelID, MessageID], Message] = Resolver(
    'message',
    get=_get_message,
    commit=lambda cache, entity, ctx: cache.commit_message(entity, ctx),
    fetch=_fetch_message,
)

__all__ = (
    'Resolver',
    'CHANNEL_RESOLVER',
    'SERVER_RESOLVER',
    'USER_RESOLVER',
    'MEMBER_RESOLVER',
    'MESSAGE_RESOLVER',
)
