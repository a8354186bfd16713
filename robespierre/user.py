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

from attrs import define, evolve, field
import typing

from .asset import Asset
from .base import Base
from .core import UNDEFINED, UndefinedOr, UserID
from .enums import Presence, RelationshipStatus, UserField


@define(slots=True, frozen=True)
class UserStatus:
    """Represents user's active status."""

    text: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The custom status text."""

    presence: typing.Optional[Presence] = field(repr=True, kw_only=True)
    """Optional[:class:`.Presence`]: The current presence option."""


@define(slots=True, frozen=True)
class UserProfile:
    """Represents user's profile page."""

    content: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The text content on user's profile."""

    background: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The background visible on user's profile."""


@define(slots=True, frozen=True)
class Relationship:
    """Represents a relationship entry indicating current status with other user."""

    id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The other user's ID."""

    status: RelationshipStatus = field(repr=True, kw_only=True)
    """:class:`.RelationshipStatus`: The relationship with other user."""


@define(slots=True, frozen=True)
class BotUserInfo:
    """Bot information for if the user is a bot."""

    owner_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The ID of the owner of this bot."""


@define(slots=True, eq=False)
class PartialUser(Base):
    """Represents a partial user on Revolt.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'user'

    id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The ID of the user."""

    name: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new user's name."""

    avatar: UndefinedOr[Asset] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.Asset`]: The new user's avatar."""

    badges: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The new user's badges raw value."""

    status: UndefinedOr[UserStatus] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.UserStatus`]: The new user's status."""

    profile: UndefinedOr[UserProfile] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.UserProfile`]: The new user's profile page."""

    online: UndefinedOr[bool] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`bool`]: Whether the user came online."""

    flags: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The user's flags raw value."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(
            v is UNDEFINED
            for v in (self.name, self.avatar, self.badges, self.status, self.profile, self.online, self.flags)
        )


@define(slots=True, eq=False)
class User(Base):
    """Represents a user on Revolt."""

    id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The ID of the user."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The username of the user."""

    avatar: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The avatar of the user."""

    relations: list[Relationship] = field(repr=True, kw_only=True)
    """List[:class:`.Relationship`]: The relationships with other users. Only present on own user."""

    badges: int = field(repr=True, kw_only=True)
    """:class:`int`: The user's badges raw value."""

    status: typing.Optional[UserStatus] = field(repr=True, kw_only=True)
    """Optional[:class:`.UserStatus`]: The current user's status."""

    profile: typing.Optional[UserProfile] = field(repr=True, kw_only=True)
    """Optional[:class:`.UserProfile`]: The user's profile page."""

    relationship: typing.Optional[RelationshipStatus] = field(repr=True, kw_only=True)
    """Optional[:class:`.RelationshipStatus`]: The current session user's relationship with this user."""

    online: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the user is currently online."""

    flags: int = field(repr=True, kw_only=True)
    """:class:`int`: The user's flags raw value."""

    bot: typing.Optional[BotUserInfo] = field(repr=True, kw_only=True)
    """Optional[:class:`.BotUserInfo`]: The information about the bot."""

    @property
    def mention(self) -> str:
        """:class:`str`: The user mention."""
        return f'<@{self.id}>'

    def locally_update(self, data: PartialUser, /) -> None:
        """Locally updates user with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.avatar is not UNDEFINED:
            self.avatar = data.avatar
        if data.badges is not UNDEFINED:
            self.badges = data.badges
        if data.status is not UNDEFINED:
            self.status = data.status
        if data.profile is not UNDEFINED:
            self.profile = data.profile
        if data.online is not UNDEFINED:
            self.online = data.online
        if data.flags is not UNDEFINED:
            self.flags = data.flags

    def locally_clear(self, tag: UserField, /) -> None:
        """Locally resets a field of user to its empty value.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if tag is UserField.avatar:
            self.avatar = None
        elif tag is UserField.status_text:
            if self.status is not None:
                self.status = evolve(self.status, text=None)
        elif tag is UserField.status_presence:
            if self.status is not None:
                self.status = evolve(self.status, presence=None)
        elif tag is UserField.profile_content:
            if self.profile is not None:
                self.profile = evolve(self.profile, content=None)
        elif tag is UserField.profile_background:
            if self.profile is not None:
                self.profile = evolve(self.profile, background=None)


__all__ = (
    'UserStatus',
    'UserProfile',
    'Relationship',
    'BotUserInfo',
    'PartialUser',
    'User',
)
