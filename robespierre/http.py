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
from inspect import isawaitable
import logging
import typing

import aiohttp
from multidict import CIMultiDict

from . import routes, utils
from .core import (
    UNDEFINED,
    UndefinedOr,
    ulid_new,
    __version__ as version,
)
from .errors import (
    HTTPException,
    TransportError,
    Unauthorized,
    Forbidden,
    NotFound,
    Conflict,
    Ratelimited,
    InternalServerError,
    BadGateway,
)
from .message import Reply

if typing.TYPE_CHECKING:
    from collections.abc import Sequence

    from . import raw
    from .channel import Channel
    from .core import AttachmentID, ChannelID, MessageID, ServerID, UserID
    from .message import Message
    from .server import Member, Server
    from .state import State
    from .user import User

DEFAULT_HTTP_USER_AGENT = f'robespierre (https://github.com/MCausc78/robespierre, {version})'


_L = logging.getLogger(__name__)
_STATUS_TO_ERRORS = {
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    409: Conflict,
    429: Ratelimited,
    500: InternalServerError,
    502: BadGateway,
}


class HTTPClient:
    """Represents an HTTP client sending HTTP requests to the Revolt API.

    Attributes
    ----------
    bot: :class:`bool`
        Whether the token belongs to bot account.
    max_retries: :class:`int`
        How many times to retry requests that received 429 or 502 HTTP status code.
    state: :class:`State`
        The state.
    token: :class:`str`
        The token in use. May be empty if not started.
    user_agent: :class:`str`
        The HTTP user agent used when making requests.
    """

    __slots__ = (
        '_base',
        '_session',
        'bot',
        'max_retries',
        'state',
        'token',
        'user_agent',
    )

    def __init__(
        self,
        token: typing.Optional[str] = None,
        *,
        base: typing.Optional[str] = None,
        bot: bool = True,
        max_retries: typing.Optional[int] = None,
        state: State,
        session: typing.Union[
            utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession, None
        ] = None,
        user_agent: typing.Optional[str] = None,
    ) -> None:
        if base is None:
            base = 'https://api.revolt.chat'
        self._base: str = base.rstrip('/')
        self._session: typing.Union[
            utils.MaybeAwaitableFunc[[HTTPClient], aiohttp.ClientSession], aiohttp.ClientSession, None
        ] = session
        self.bot: bool = bot
        self.max_retries: int = max_retries or 3
        self.state: State = state
        self.token: str = token or ''
        self.user_agent: str = user_agent or DEFAULT_HTTP_USER_AGENT

    @property
    def base(self) -> str:
        """:class:`str`: The base URL used for API requests."""
        return self._base

    def url_for(self, route: routes.CompiledRoute, /) -> str:
        """Returns a URL for route.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.

        Returns
        -------
        :class:`str`
            The URL for the route.
        """
        return self._base + route.build()

    def add_headers(
        self,
        headers: CIMultiDict[typing.Any],
        route: routes.CompiledRoute,
        /,
        *,
        accept_json: bool = True,
        bot: UndefinedOr[bool] = UNDEFINED,
        json_body: bool = False,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[typing.Optional[str]] = UNDEFINED,
    ) -> utils.MaybeAwaitable[None]:
        if accept_json:
            headers['Accept'] = 'application/json'

        if json_body:
            headers['Content-type'] = 'application/json'

        if bot is UNDEFINED:
            bot = self.bot

        th = 'X-Bot-Token' if bot else 'X-Session-Token'

        if token is UNDEFINED:
            token = self.token

        if token:
            headers[th] = token

        if user_agent is UNDEFINED:
            user_agent = self.user_agent

        if user_agent is not None:
            headers['User-Agent'] = user_agent

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

    async def send_request(
        self,
        session: aiohttp.ClientSession,
        /,
        *,
        method: str,
        url: str,
        headers: CIMultiDict[typing.Any],
        **kwargs,
    ) -> aiohttp.ClientResponse:
        return await session.request(
            method,
            url,
            headers=headers,
            **kwargs,
        )

    async def raw_request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        bot: UndefinedOr[bool] = UNDEFINED,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> aiohttp.ClientResponse:
        """|coro|

        Perform a HTTP request, with retries and errors handling.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        bot: UndefinedOr[:class:`bool`]
            Whether the authentication token belongs to bot account. Defaults to :attr:`.bot`.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            The API returned an error status.
        :class:`TransportError`
            The request could not be sent, or the response could not be read.

        Returns
        -------
        :class:`aiohttp.ClientResponse`
            The aiohttp response.
        """
        headers: CIMultiDict[str]

        try:
            headers = CIMultiDict(kwargs.pop('headers'))
        except KeyError:
            headers = CIMultiDict()

        retries = 0

        tmp = self.add_headers(
            headers,
            route,
            accept_json=accept_json,
            bot=bot,
            json_body=json is not UNDEFINED,
            token=token,
            user_agent=user_agent,
        )
        if isawaitable(tmp):
            await tmp

        method = route.route.method
        path = route.build()
        url = self._base + path

        if json is not UNDEFINED:
            kwargs['data'] = utils.to_json(json)

        while True:
            _L.debug('Sending request to %s %s with %s', method, path, kwargs.get('data'))

            session = await self._get_session()

            try:
                response = await self.send_request(
                    session,
                    method=method,
                    url=url,
                    headers=headers,
                    **kwargs,
                )
            except OSError as exc:
                if exc.errno in (54, 10054) and retries < self.max_retries:  # Connection reset by peer
                    retries += 1
                    await asyncio.sleep(1.5)
                    continue
                raise TransportError(method, url, exc) from exc
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                raise TransportError(method, url, exc) from exc

            if response.status >= 400:
                _L.debug('%s %s has returned %s', method, path, response.status)

                retries += 1

                if response.status == 502:
                    if retries < self.max_retries:
                        response.close()
                        continue

                elif response.status == 429:
                    if retries < self.max_retries:
                        data = await utils._json_or_text(response)

                        if isinstance(data, dict):
                            retry_after: float = data.get('retry_after', 0) / 1000.0
                        else:
                            retry_after = 1

                        _L.debug(
                            'Ratelimited on %s %s, retrying in %.3f seconds',
                            method,
                            url,
                            retry_after,
                        )
                        await asyncio.sleep(retry_after)
                        continue

                data = await utils._json_or_text(response)
                raise _STATUS_TO_ERRORS.get(response.status, HTTPException)(response, data)
            return response

    async def request(
        self,
        route: routes.CompiledRoute,
        *,
        accept_json: bool = True,
        bot: UndefinedOr[bool] = UNDEFINED,
        json: UndefinedOr[typing.Any] = UNDEFINED,
        token: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        user_agent: UndefinedOr[str] = UNDEFINED,
        **kwargs,
    ) -> typing.Any:
        """|coro|

        Perform a HTTP request, with retries and errors handling.

        Parameters
        ----------
        route: :class:`~routes.CompiledRoute`
            The route.
        accept_json: :class:`bool`
            Whether to explicitly receive JSON or not. Defaults to ``True``.
        bot: UndefinedOr[:class:`bool`]
            Whether the authentication token belongs to bot account. Defaults to :attr:`.bot`.
        json: UndefinedOr[typing.Any]
            The JSON payload to pass in.
        token: UndefinedOr[Optional[:class:`str`]]
            The token to use when requesting the route.
        user_agent: UndefinedOr[:class:`str`]
            The user agent to use for HTTP request. Defaults to :attr:`.user_agent`.

        Raises
        ------
        :class:`HTTPException`
            The API returned an error status.
        :class:`TransportError`
            The request could not be sent, or the response could not be read.

        Returns
        -------
        typing.Any
            The parsed JSON response.
        """
        response = await self.raw_request(
            route,
            accept_json=accept_json,
            bot=bot,
            json=json,
            token=token,
            user_agent=user_agent,
            **kwargs,
        )
        try:
            result = await utils._json_or_text(response)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(response.request_info.method, str(response.request_info.url), exc) from exc
        finally:
            response.close()

        _L.debug(
            '%s %s has received %s %s',
            response.request_info.method,
            response.request_info.url,
            response.status,
            result,
        )
        return result

    async def cleanup(self) -> None:
        """|coro|

        Closes the aiohttp session.
        """
        if self._session is not None and not callable(self._session):
            await self._session.close()

    async def get_channel(self, channel_id: ChannelID, /) -> Channel:
        """|coro|

        Fetch a :class:`.Channel` with the specified ID.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel to fetch.

        Raises
        ------
        :class:`NotFound`
            The channel does not exist.
        :class:`FetchError`
            Retrieving the channel failed.

        Returns
        -------
        :class:`.Channel`
            The retrieved channel.
        """
        resp: raw.Channel = await self.request(routes.CHANNELS_CHANNEL_FETCH.compile(channel_id=channel_id))
        return self.state.parser.parse_channel(resp)

    async def get_message(self, channel_id: ChannelID, message_id: MessageID, /) -> Message:
        """|coro|

        Retrieves a message.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel the message is in.
        message_id: :class:`.MessageID`
            The message to retrieve.

        Raises
        ------
        :class:`NotFound`
            The channel or message does not exist.
        :class:`FetchError`
            Retrieving the message failed.

        Returns
        -------
        :class:`.Message`
            The retrieved message.
        """
        resp: raw.Message = await self.request(
            routes.CHANNELS_MESSAGE_FETCH.compile(channel_id=channel_id, message_id=message_id)
        )
        return self.state.parser.parse_message(resp)

    async def send_message(
        self,
        channel_id: ChannelID,
        content: typing.Optional[str] = None,
        *,
        nonce: typing.Optional[str] = None,
        attachments: typing.Optional[Sequence[AttachmentID]] = None,
        replies: typing.Optional[Sequence[typing.Union[Reply, MessageID]]] = None,
    ) -> Message:
        """|coro|

        Sends a message to the given channel.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The destination channel.
        content: Optional[:class:`str`]
            The message content.
        nonce: Optional[:class:`str`]
            The message nonce. A new ULID is generated if not provided.
        attachments: Optional[List[:class:`.AttachmentID`]]
            The IDs of uploaded files to send the message with.
        replies: Optional[List[Union[:class:`.Reply`, :class:`.MessageID`]]]
            The messages to reply to.

        Raises
        ------
        :class:`Forbidden`
            You do not have permissions to send messages in the channel.
        :class:`FetchError`
            Sending the message failed.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        if nonce is None:
            nonce = ulid_new()

        payload: raw.DataMessageSend = {'nonce': nonce}
        if content is not None:
            payload['content'] = content
        if attachments is not None:
            payload['attachments'] = list(attachments)
        if replies is not None:
            payload['replies'] = [
                (reply.build() if isinstance(reply, Reply) else {'id': reply, 'mention': False}) for reply in replies
            ]

        resp: raw.Message = await self.request(
            routes.CHANNELS_MESSAGE_SEND.compile(channel_id=channel_id),
            json=payload,
            headers={'Idempotency-Key': nonce},
        )
        return self.state.parser.parse_message(resp)

    async def get_member(self, server_id: ServerID, user_id: UserID, /) -> Member:
        """|coro|

        Retrieves a member.

        Parameters
        ----------
        server_id: :class:`.ServerID`
            The server to retrieve member in.
        user_id: :class:`.UserID`
            The user to retrieve.

        Raises
        ------
        :class:`NotFound`
            The server does not exist, or the user is not a member of it.
        :class:`FetchError`
            Retrieving the member failed.

        Returns
        -------
        :class:`.Member`
            The retrieved member.
        """
        resp: raw.Member = await self.request(
            routes.SERVERS_MEMBER_FETCH.compile(server_id=server_id, member_id=user_id)
        )
        return self.state.parser.parse_member(resp)

    async def get_server(self, server_id: ServerID, /) -> Server:
        """|coro|

        Retrieves a :class:`.Server`, including its roles.

        Parameters
        ----------
        server_id: :class:`.ServerID`
            The server to retrieve.

        Raises
        ------
        :class:`NotFound`
            The server does not exist.
        :class:`FetchError`
            Retrieving the server failed.

        Returns
        -------
        :class:`.Server`
            The retrieved server.
        """
        resp: raw.Server = await self.request(routes.SERVERS_SERVER_FETCH.compile(server_id=server_id))
        return self.state.parser.parse_server(resp)

    async def get_user(self, user_id: UserID, /) -> User:
        """|coro|

        Retrieves a user from their ID.

        Parameters
        ----------
        user_id: :class:`.UserID`
            The user to retrieve.

        Raises
        ------
        :class:`NotFound`
            The user does not exist.
        :class:`FetchError`
            Retrieving the user failed.

        Returns
        -------
        :class:`.User`
            The retrieved user.
        """
        resp: raw.User = await self.request(routes.USERS_FETCH_USER.compile(user_id=user_id))
        return self.state.parser.parse_user(resp)


__all__ = (
    'DEFAULT_HTTP_USER_AGENT',
    '_STATUS_TO_ERRORS',
    'HTTPClient',
)
