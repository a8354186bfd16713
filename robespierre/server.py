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
from .core import UNDEFINED, UndefinedOr, ChannelID, MemberID, RoleID, ServerID, UserID
from .enums import MemberField, RoleField, ServerField
from .permissions import PermissionOverride
from .resolve import SERVER_RESOLVER, USER_RESOLVER

if typing.TYPE_CHECKING:
    from .state import State
    from .user import User


@define(slots=True, frozen=True)
class Category:
    """Represents a category containing channels in Revolt server."""

    id: str = field(repr=True, kw_only=True)
    """:class:`str`: Unique ID for this category."""

    title: str = field(repr=True, kw_only=True)
    """:class:`str`: The title for this category."""

    channels: list[ChannelID] = field(repr=True, kw_only=True)
    """List[:class:`.ChannelID`]: The channel's IDs inside this category."""


@define(slots=True, frozen=True)
class SystemMessageChannels:
    """Represents system message channel assignments in a Revolt server."""

    user_joined: typing.Optional[ChannelID] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`.ChannelID`]: The channel's ID to send user join messages in."""

    user_left: typing.Optional[ChannelID] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`.ChannelID`]: The channel's ID to send user left messages in."""

    user_kicked: typing.Optional[ChannelID] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`.ChannelID`]: The channel's ID to send user kicked messages in."""

    user_banned: typing.Optional[ChannelID] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`.ChannelID`]: The channel's ID to send user banned messages in."""


@define(slots=True, eq=False)
class BaseRole(Base):
    """Represents a base role in Revolt server."""

    id: RoleID = field(repr=True, kw_only=True)
    """:class:`.RoleID`: The ID of the role."""

    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID the role belongs to."""

    def get_server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server the role belongs to, if it is cached."""
        return self.state.cache.get_server(self.server_id, caching._USER_REQUEST)

    async def resolve_server(self) -> Server:
        """|coro|

        Retrieves the server the role belongs to, from cache or API.
        """
        return await SERVER_RESOLVER.resolve(self.state, self.server_id)


@define(slots=True, eq=False)
class PartialRole(BaseRole):
    """Represents a partial role for the server.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'role'

    name: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new role's name."""

    permissions: UndefinedOr[PermissionOverride] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.PermissionOverride`]: The new role's permissions."""

    colour: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new role's colour."""

    hoist: UndefinedOr[bool] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`bool`]: Whether this role should be displayed separately."""

    rank: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The new role's rank."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(v is UNDEFINED for v in (self.name, self.permissions, self.colour, self.hoist, self.rank))


@define(slots=True, eq=False)
class Role(BaseRole):
    """Represents a role in Revolt server."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The role's name."""

    permissions: PermissionOverride = field(repr=True, kw_only=True)
    """:class:`.PermissionOverride`: Permissions available to this role."""

    colour: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The role's colour. This can be any valid CSS colour."""

    hoist: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this role should be shown separately on the member sidebar."""

    rank: int = field(repr=True, kw_only=True)
    """:class:`int`: The ranking of this role. Lower values take priority."""

    def locally_update(self, data: PartialRole, /) -> None:
        """Locally updates role with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.permissions is not UNDEFINED:
            self.permissions = data.permissions
        if data.colour is not UNDEFINED:
            self.colour = data.colour
        if data.hoist is not UNDEFINED:
            self.hoist = data.hoist
        if data.rank is not UNDEFINED:
            self.rank = data.rank

    def locally_clear(self, tag: RoleField, /) -> None:
        if tag is RoleField.colour:
            self.colour = None


@define(slots=True, eq=False)
class BaseServer(Base):
    """Represents a server on Revolt."""

    id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The ID of the server."""


@define(slots=True, eq=False)
class PartialServer(BaseServer):
    """Represents a partial server on Revolt.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'server'

    owner_id: UndefinedOr[UserID] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.UserID`]: The new owner's ID."""

    name: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new server's name."""

    description: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new server's description."""

    channel_ids: UndefinedOr[list[ChannelID]] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[List[:class:`.ChannelID`]]: The server's channels now."""

    categories: UndefinedOr[list[Category]] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[List[:class:`.Category`]]: The server's categories now."""

    system_messages: UndefinedOr[SystemMessageChannels] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.SystemMessageChannels`]: The new server's system message assignments."""

    default_permissions: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The new server's default permissions raw value."""

    icon: UndefinedOr[Asset] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.Asset`]: The new server's icon."""

    banner: UndefinedOr[Asset] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.Asset`]: The new server's banner."""

    flags: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The new server's flags raw value."""

    nsfw: UndefinedOr[bool] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`bool`]: Whether the server is now conceptually marked as NSFW."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(
            v is UNDEFINED
            for v in (
                self.owner_id,
                self.name,
                self.description,
                self.channel_ids,
                self.categories,
                self.system_messages,
                self.default_permissions,
                self.icon,
                self.banner,
                self.flags,
                self.nsfw,
            )
        )


@define(slots=True, eq=False)
class Server(BaseServer):
    """Represents a server on Revolt."""

    owner_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who owns this server."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The name of the server."""

    description: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The server description."""

    channel_ids: list[ChannelID] = field(repr=True, kw_only=True)
    """List[:class:`.ChannelID`]: The IDs of channels within this server."""

    categories: list[Category] = field(repr=True, kw_only=True)
    """List[:class:`.Category`]: The categories for this server."""

    system_messages: typing.Optional[SystemMessageChannels] = field(repr=True, kw_only=True)
    """Optional[:class:`.SystemMessageChannels`]: The configuration for sending system event messages."""

    roles: dict[RoleID, Role] = field(repr=True, kw_only=True)
    """Dict[:class:`.RoleID`, :class:`.Role`]: The roles for this server."""

    default_permissions: int = field(repr=True, kw_only=True)
    """:class:`int`: Default set of server and channel permissions."""

    icon: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The server icon."""

    banner: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The server banner."""

    nsfw: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this server is flagged as not safe for work."""

    flags: int = field(repr=True, kw_only=True)
    """:class:`int`: The server's flags raw value."""

    def get_owner(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The server owner, if it is cached."""
        return self.state.cache.get_user(self.owner_id, caching._USER_REQUEST)

    async def resolve_owner(self) -> User:
        """|coro|

        Retrieves the server owner, from cache or API.
        """
        return await USER_RESOLVER.resolve(self.state, self.owner_id)

    def locally_update(self, data: PartialServer, /) -> None:
        """Locally updates server with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if data.owner_id is not UNDEFINED:
            self.owner_id = data.owner_id
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.description is not UNDEFINED:
            self.description = data.description
        if data.channel_ids is not UNDEFINED:
            self.channel_ids = data.channel_ids
        if data.categories is not UNDEFINED:
            self.categories = data.categories
        if data.system_messages is not UNDEFINED:
            self.system_messages = data.system_messages
        if data.default_permissions is not UNDEFINED:
            self.default_permissions = data.default_permissions
        if data.icon is not UNDEFINED:
            self.icon = data.icon
        if data.banner is not UNDEFINED:
            self.banner = data.banner
        if data.flags is not UNDEFINED:
            self.flags = data.flags
        if data.nsfw is not UNDEFINED:
            self.nsfw = data.nsfw

    def locally_clear(self, tag: ServerField, /) -> None:
        if tag is ServerField.icon:
            self.icon = None
        elif tag is ServerField.banner:
            self.banner = None
        elif tag is ServerField.description:
            self.description = None
        elif tag is ServerField.categories:
            self.categories = []
        elif tag is ServerField.system_messages:
            self.system_messages = None

    def locally_upsert_role(self, role: Role, /) -> None:
        """Locally replaces or adds a role.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        self.roles = {**self.roles, role.id: role}

    def locally_remove_role(self, role_id: RoleID, /) -> None:
        """Locally removes a role.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        self.roles = {k: v for k, v in self.roles.items() if k != role_id}


@define(slots=True, eq=False)
class BaseMember:
    """Represents a Revolt base member to a :class:`Server`."""

    state: State = field(repr=False, kw_only=True, eq=False)
    """:class:`.State`: The state that controls this member."""

    id: MemberID = field(repr=True, kw_only=True)
    """:class:`.MemberID`: The composite key of the member."""

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, BaseMember) and self.id == other.id

    @property
    def server_id(self) -> ServerID:
        """:class:`.ServerID`: The ID of server the member is in."""
        return self.id.server

    @property
    def user_id(self) -> UserID:
        """:class:`.UserID`: The ID of the user."""
        return self.id.user

    def get_user(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The user, if it is cached."""
        return self.state.cache.get_user(self.id.user, caching._USER_REQUEST)

    def get_server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server the member is in, if it is cached."""
        return self.state.cache.get_server(self.id.server, caching._USER_REQUEST)

    async def resolve_user(self) -> User:
        """|coro|

        Retrieves the user behind this member, from cache or API.
        """
        return await USER_RESOLVER.resolve(self.state, self.id.user)

    async def resolve_server(self) -> Server:
        """|coro|

        Retrieves the server the member is in, from cache or API.
        """
        return await SERVER_RESOLVER.resolve(self.state, self.id.server)


@define(slots=True, eq=False)
class PartialMember(BaseMember):
    """Represents a partial Revolt member to a :class:`Server`.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'member'

    nickname: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new member's nickname."""

    avatar: UndefinedOr[Asset] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.Asset`]: The new member's avatar."""

    roles: UndefinedOr[list[RoleID]] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[List[:class:`.RoleID`]]: The new member's roles."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(v is UNDEFINED for v in (self.nickname, self.avatar, self.roles))


@define(slots=True, eq=False)
class Member(BaseMember):
    """Represents a Revolt member to a :class:`Server`."""

    joined_at: typing.Optional[datetime] = field(repr=True, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the member joined the server."""

    nickname: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The member's nickname."""

    avatar: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The member's avatar on server."""

    roles: list[RoleID] = field(repr=True, kw_only=True)
    """List[:class:`.RoleID`]: The member's roles."""

    def locally_update(self, data: PartialMember, /) -> None:
        """Locally updates member with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if data.nickname is not UNDEFINED:
            self.nickname = data.nickname
        if data.avatar is not UNDEFINED:
            self.avatar = data.avatar
        if data.roles is not UNDEFINED:
            self.roles = data.roles

    def locally_clear(self, tag: MemberField, /) -> None:
        if tag is MemberField.nickname:
            self.nickname = None
        elif tag is MemberField.avatar:
            self.avatar = None
        elif tag is MemberField.roles:
            self.roles = []


__all__ = (
    'Category',
    'SystemMessageChannels',
    'BaseRole',
    'PartialRole',
    'Role',
    'BaseServer',
    'PartialServer',
    'Server',
    'BaseMember',
    'PartialMember',
    'Member',
)
