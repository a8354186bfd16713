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
from datetime import datetime, timezone
from enum import Enum
import os
import time
import typing

if typing.TYPE_CHECKING:
    from typing_extensions import Self


class _Sentinel(Enum):
    """The library sentinels."""

    undefined = 'UNDEFINED'

    def __bool__(self) -> typing.Literal[False]:
        return False

    def __repr__(self) -> typing.Literal['UNDEFINED']:
        return self.value

    def __eq__(self, other: object, /) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)


Undefined: typing.TypeAlias = typing.Literal[_Sentinel.undefined]
UNDEFINED: Undefined = _Sentinel.undefined


T = typing.TypeVar('T')
UndefinedOr = Undefined | T

# Crockford's base32, as used by ULIDs
_ULID_ALPHABET = '0123456789ABCDEFGHJKMNPQRSTVWXYZ'
_ULID_DECODE = {c: i for i, c in enumerate(_ULID_ALPHABET)}


def ulid_timestamp(val: str, /) -> float:
    """:class:`float`: Returns the UNIX timestamp (in seconds) encoded in first 10 characters of ULID."""
    ms = 0
    for c in val[:10].upper():
        ms = (ms << 5) | _ULID_DECODE[c]
    return ms / 1000


def ulid_time(val: str, /) -> datetime:
    return datetime.fromtimestamp(ulid_timestamp(val), timezone.utc)


def ulid_new(timestamp: typing.Optional[float] = None, /) -> str:
    """:class:`str`: Generates a new random ULID, suitable for message nonces.

    Parameters
    ----------
    timestamp: Optional[:class:`float`]
        The UNIX timestamp (in seconds) to encode. Defaults to current time.
    """
    if timestamp is None:
        timestamp = time.time()
    value = (int(timestamp * 1000) << 80) | int.from_bytes(os.urandom(10), 'big')
    return ''.join(_ULID_ALPHABET[(value >> shift) & 31] for shift in range(125, -1, -5))


class BaseID(str):
    """Base class for all Revolt identifiers.

    IDs of different kinds never compare equal, even when they have same value.
    Ordering is only defined between IDs of same kind.
    """

    __slots__ = ()

    def __new__(cls, value: str, /) -> Self:
        if not isinstance(value, str):
            raise TypeError(f'{cls.__name__} must be created from str, not {type(value).__name__}')
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({str.__repr__(self)})'

    def __eq__(self, other: object, /) -> bool:
        return self.__class__ is other.__class__ and str.__eq__(self, other)  # type: ignore

    def __ne__(self, other: object, /) -> bool:
        return not self.__eq__(other)

    __hash__ = str.__hash__

    def __lt__(self, other: object, /) -> bool:
        if self.__class__ is not other.__class__:
            return NotImplemented
        return str.__lt__(self, other)  # type: ignore

    def __le__(self, other: object, /) -> bool:
        if self.__class__ is not other.__class__:
            return NotImplemented
        return str.__le__(self, other)  # type: ignore

    def __gt__(self, other: object, /) -> bool:
        if self.__class__ is not other.__class__:
            return NotImplemented
        return str.__gt__(self, other)  # type: ignore

    def __ge__(self, other: object, /) -> bool:
        if self.__class__ is not other.__class__:
            return NotImplemented
        return str.__ge__(self, other)  # type: ignore

    @property
    def created_at(self) -> datetime:
        """:class:`~datetime.datetime`: When the entity with this ID was created."""
        return ulid_time(self)


class ChannelID(BaseID):
    __slots__ = ()


class ServerID(BaseID):
    __slots__ = ()


class MessageID(BaseID):
    __slots__ = ()


class UserID(BaseID):
    __slots__ = ()


class RoleID(BaseID):
    __slots__ = ()


class AttachmentID(BaseID):
    __slots__ = ()


@define(slots=True, frozen=True, order=True)
class MemberID:
    """Represents a composite key identifying server member."""

    server: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID."""

    user: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID."""


class HasID(typing.Protocol):
    id: typing.Any


IDT = typing.TypeVar('IDT')
U = typing.TypeVar('U', bound='HasID')
IDOr = IDT | U


def resolve_id(resolvable: typing.Any, /) -> typing.Any:
    """Returns ID of resolvable, or resolvable itself if it is already an ID."""
    if isinstance(resolvable, (BaseID, MemberID)):
        return resolvable
    return resolvable.id


# zero ID
ZID = UserID('00000000000000000000000000')

__version__: str = '0.2.0'

__all__ = (
    'Undefined',
    'UNDEFINED',
    'T',
    'UndefinedOr',
    'ulid_timestamp',
    'ulid_time',
    'ulid_new',
    'BaseID',
    'ChannelID',
    'ServerID',
    'MessageID',
    'UserID',
    'RoleID',
    'AttachmentID',
    'MemberID',
    'HasID',
    'IDOr',
    'resolve_id',
    '__version__',
    'ZID',
)
