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

if typing.TYPE_CHECKING:
    from aiohttp import ClientResponse as Response


class RobespierreError(Exception):
    """Base exception class for robespierre

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


class FetchError(RobespierreError):
    """Base class for failures that happened while retrieving entity from Revolt API.

    The library does not interpret the cause; catch subclasses for specific failures.
    """

    __slots__ = ()


class TransportError(FetchError):
    """Exception that's raised when request could not be sent or response could not be read.

    The original exception is available as ``__cause__``.
    """

    __slots__ = ('method', 'url')

    def __init__(self, method: str, url: str, exc: BaseException, /) -> None:
        self.method: str = method
        self.url: str = url
        super().__init__(f'{method} {url} failed: {exc!r}')


class HTTPException(FetchError):
    """Exception that's raised when an HTTP request operation fails.

    Attributes
    ------------
    response: :class:`aiohttp.ClientResponse`
        The response of the failed HTTP request. This is an
        instance of :class:`aiohttp.ClientResponse`.
    data: Union[Dict[:class:`str`, Any], Any]
        The data of the error. Could be an empty string.
    status: :class:`int`
        The status code of the HTTP request.
    type: :class:`str`
        The Revolt specific error type for the failure.
    retry_after: Optional[:class:`float`]
        The duration in seconds to wait until ratelimit expires.
    error: Optional[:class:`str`]
        The validation error details.
        Only applicable when :attr:`~.type` is ``'FailedValidation'``.
    permission: Optional[:class:`str`]
        The permission required to perform request.
        Only applicable when :attr:`~.type` one of following values:
        - ``'MissingPermission'``
        - ``'MissingUserPermission'``
    """

    __slots__ = (
        'response',
        'data',
        'status',
        'type',
        'retry_after',
        'error',
        'permission',
    )

    def __init__(
        self,
        response: Response,
        data: dict[str, typing.Any] | str,
        /,
    ) -> None:
        self.response: Response = response
        self.data: dict[str, typing.Any] | str = data
        self.status: int = response.status

        errors = []

        if isinstance(data, str):
            self.type: str = 'NonJSON'
            self.retry_after: float | None = None
            self.error: str | None = data
            self.permission: str | None = None
            errors.append(data)
        else:
            self.type = data.get('type', 'Unknown')

            self.retry_after = data.get('retry_after')
            if self.retry_after is not None:
                errors.append(f'retry_after={self.retry_after}')

            self.error = data.get('error')
            if self.error is not None:
                errors.append(f'error={self.error}')

            self.permission = data.get('permission')
            if self.permission is not None:
                errors.append(f'permission={self.permission}')

        super().__init__(
            f'{self.type} (raw={data})' if len(errors) == 0 else f"{self.type}: {' '.join(errors)} (raw={data})"
        )


class Unauthorized(HTTPException):
    __slots__ = ()


class Forbidden(HTTPException):
    __slots__ = ()


class NotFound(HTTPException):
    __slots__ = ()


class Conflict(HTTPException):
    __slots__ = ()


class Ratelimited(HTTPException):
    __slots__ = ()


class InternalServerError(HTTPException):
    __slots__ = ()


class BadGateway(HTTPException):
    __slots__ = ()


class ProtocolDecodeError(RobespierreError):
    """Exception that's raised when a WebSocket message could not be decoded.

    Attributes
    ----------
    tag: Optional[:class:`str`]
        The ``type`` discriminator of the message, if it was present.
    reason: :class:`str`
        The structural mismatch.
    payload: Any
        The raw message.
    """

    __slots__ = ('tag', 'reason', 'payload')

    def __init__(self, tag: str | None, reason: str, payload: typing.Any = None, /) -> None:
        self.tag: str | None = tag
        self.reason: str = reason
        self.payload: typing.Any = payload
        super().__init__(f'Failed to decode {tag!r} message: {reason}')


class OrphanPatchError(RobespierreError):
    """Exception that's raised when an update arrived for entity that was never seen before.

    Attributes
    ----------
    kind: :class:`str`
        The entity kind (``'channel'``, ``'server'``, etc).
    id: Any
        The ID of entity.
    """

    __slots__ = ('kind', 'id')

    def __init__(self, kind: str, id: typing.Any, /) -> None:
        self.kind: str = kind
        self.id: typing.Any = id
        super().__init__(f'Cannot patch {kind} {id!r}: no snapshot available')


class ShardError(RobespierreError):
    __slots__ = ()


class ShardClosedError(ShardError):
    __slots__ = ()


class AuthenticationError(ShardError):
    __slots__ = ('message',)

    def __init__(self, a: typing.Any, /) -> None:
        self.message: typing.Any = a
        super().__init__('Failed to connect shard', a)


class ConnectError(ShardError):
    __slots__ = ('errors',)

    def __init__(self, tries: int, errors: list[Exception], /) -> None:
        self.errors = errors
        super().__init__(f'Giving up, after {tries} tries, last 3 errors:', errors[-3:])


__all__ = (
    'RobespierreError',
    'FetchError',
    'TransportError',
    'HTTPException',
    'Unauthorized',
    'Forbidden',
    'NotFound',
    'Conflict',
    'Ratelimited',
    'InternalServerError',
    'BadGateway',
    'ProtocolDecodeError',
    'OrphanPatchError',
    'ShardError',
    'ShardClosedError',
    'AuthenticationError',
    'ConnectError',
)
