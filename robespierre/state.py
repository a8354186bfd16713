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

import typing

from .cache import _USER_REQUEST, EmptyCache
from .core import ZID
from .parser import Parser
from .user import User

if typing.TYPE_CHECKING:
    from .cache import Cache
    from .core import UserID
    from .http import HTTPClient
    from .shard import Shard


class State:
    """Represents a manager for all robespierre objects.

    Attributes
    ----------
    parser: :class:`Parser`
        The parser.
    me_id: Optional[:class:`.UserID`]
        The connected user's ID, if known.
    system: :class:`User`
        The Revolt#0000 sentinel user.
    """

    __slots__ = (
        '_cache',
        '_http',
        'parser',
        '_shard',
        'me_id',
        'system',
    )

    def __init__(
        self,
        *,
        cache: Cache | None = None,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
        shard: Shard | None = None,
        me_id: UserID | None = None,
    ) -> None:
        self._cache: Cache = cache if cache is not None else EmptyCache()
        self._http = http
        self.parser = parser if parser else Parser(state=self)
        self._shard = shard
        self.me_id: UserID | None = me_id
        self.system = User(
            state=self,
            id=ZID,
            name='Revolt',
            avatar=None,
            relations=[],
            badges=0,
            status=None,
            profile=None,
            relationship=None,
            online=True,
            flags=0,
            bot=None,
        )

    def setup(
        self,
        *,
        cache: Cache | None = None,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
        shard: Shard | None = None,
    ) -> State:
        if cache is not None:
            self._cache = cache
        if http:
            self._http = http
        if parser:
            self.parser = parser
        if shard:
            self._shard = shard
        return self

    @property
    def cache(self) -> Cache:
        """:class:`.Cache`: The cache. This is :class:`.EmptyCache` if caching is disabled."""
        return self._cache

    @property
    def http(self) -> HTTPClient:
        assert self._http, 'State has no HTTP client attached'
        return self._http

    @property
    def shard(self) -> Shard:
        assert self._shard, 'State has no shard attached'
        return self._shard

    @property
    def me(self) -> User | None:
        """Optional[:class:`.User`]: The currently logged in user, if it is cached."""
        if self.me_id is None:
            return None
        return self._cache.get_user(self.me_id, _USER_REQUEST)


__all__ = ('State',)
