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
import logging
import typing

from attrs import define, field

from .enums import Enum

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .channel import Channel
    from .core import ChannelID, MemberID, MessageID, RoleID, ServerID, UserID
    from .events import BaseEvent
    from .message import Message
    from .server import Member, Role, Server
    from .user import User

_L = logging.getLogger(__name__)


class CacheContextType(Enum):
    custom = 'CUSTOM'
    undefined = 'UNDEFINED'
    user_request = 'USER_REQUEST'
    library_request = 'LIBRARY_REQUEST'
    event = 'EVENT'


@define(slots=True)
class BaseCacheContext:
    """Represents a cache context.

    Contexts tell custom cache implementations why the cache is being accessed.
    """

    type: CacheContextType = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.CacheContextType`: The context's type."""


@define(slots=True)
class UndefinedCacheContext(BaseCacheContext):
    """Represents a undefined cache context."""


@define(slots=True)
class EventCacheContext(BaseCacheContext):
    """Represents a cache context created by WebSocket event."""

    event: BaseEvent = field(repr=True, hash=True, kw_only=True, eq=True)
    """:class:`.BaseEvent`: The event involved."""


_UNDEFINED: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(type=CacheContextType.undefined)
_USER_REQUEST: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(type=CacheContextType.user_request)
_LIBRARY_REQUEST: typing.Final[UndefinedCacheContext] = UndefinedCacheContext(
    type=CacheContextType.library_request
)


class Cache(ABC):
    """An ABC that represents cache.

    Implementations must be synchronous: event processing relies on
    each operation completing without yielding to the event loop.

    .. note::
        This class might not be what you're looking for.
        Head over to :class:`.EmptyCache` and :class:`.MapCache` for implementations.
    """

    __slots__ = ()

    ############
    # Channels #
    ############

    @abstractmethod
    def get_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        """Optional[:class:`.Channel`]: Retrieves a channel using ID.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    @abstractmethod
    def get_channels_mapping(self) -> Mapping[ChannelID, Channel]:
        """Mapping[:class:`.ChannelID`, :class:`.Channel`]: Retrieves all available channels as mapping."""
        ...

    @abstractmethod
    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        """Stores a channel.

        Parameters
        ----------
        channel: :class:`.Channel`
            The channel to store.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    def commit_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> Channel:
        """:class:`.Channel`: Stores a channel and returns it back."""
        self.store_channel(channel, ctx)
        return channel

    @abstractmethod
    def delete_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> None:
        """Deletes a channel. Does nothing if channel is not cached.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel's ID.
        ctx: :class:`.BaseCacheContext`
            The context.
        """
        ...

    ############
    # Messages #
    ############

    @abstractmethod
    def get_message(
        self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Message]:
        """Optional[:class:`.Message`]: Retrieves a message in channel using channel and message IDs."""
        ...

    @abstractmethod
    def get_messages_mapping_of(
        self, channel_id: ChannelID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[MessageID, Message]]:
        """Optional[Mapping[:class:`.MessageID`, :class:`.Message`]]: Retrieves all messages cached in channel."""
        ...

    @abstractmethod
    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        """Stores a message."""
        ...

    def commit_message(self, message: Message, ctx: BaseCacheContext, /) -> Message:
        """:class:`.Message`: Stores a message and returns it back."""
        self.store_message(message, ctx)
        return message

    @abstractmethod
    def delete_message(self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /) -> None:
        """Deletes a message. Does nothing if message is not cached."""
        ...

    ###########
    # Servers #
    ###########

    @abstractmethod
    def get_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: Retrieves a server using ID."""
        ...

    @abstractmethod
    def get_servers_mapping(self) -> Mapping[ServerID, Server]:
        """Mapping[:class:`.ServerID`, :class:`.Server`]: Retrieves all available servers as mapping."""
        ...

    @abstractmethod
    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        """Stores a server, along with its roles."""
        ...

    def commit_server(self, server: Server, ctx: BaseCacheContext, /) -> Server:
        """:class:`.Server`: Stores a server and returns it back."""
        self.store_server(server, ctx)
        return server

    @abstractmethod
    def delete_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> None:
        """Deletes a server, along with its roles and members. Does nothing if server is not cached."""
        ...

    #########
    # Roles #
    #########

    @abstractmethod
    def get_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> typing.Optional[Role]:
        """Optional[:class:`.Role`]: Retrieves a server role using server and role IDs."""
        ...

    @abstractmethod
    def get_roles_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[RoleID, Role]]:
        """Optional[Mapping[:class:`.RoleID`, :class:`.Role`]]: Retrieves all roles cached in server."""
        ...

    @abstractmethod
    def store_role(self, role: Role, ctx: BaseCacheContext, /) -> None:
        """Stores a role."""
        ...

    def commit_role(self, role: Role, ctx: BaseCacheContext, /) -> Role:
        """:class:`.Role`: Stores a role and returns it back."""
        self.store_role(role, ctx)
        return role

    @abstractmethod
    def delete_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> None:
        """Deletes a role. Does nothing if role is not cached."""
        ...

    ##################
    # Server Members #
    ##################

    @abstractmethod
    def get_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: Retrieves a member using composite ID."""
        ...

    @abstractmethod
    def get_members_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[UserID, Member]]:
        """Optional[Mapping[:class:`.UserID`, :class:`.Member`]]: Retrieves all members cached in server."""
        ...

    @abstractmethod
    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        """Stores a member."""
        ...

    def commit_member(self, member: Member, ctx: BaseCacheContext, /) -> Member:
        """:class:`.Member`: Stores a member and returns it back."""
        self.store_member(member, ctx)
        return member

    @abstractmethod
    def delete_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> None:
        """Deletes a member. Does nothing if member is not cached."""
        ...

    #########
    # Users #
    #########

    @abstractmethod
    def get_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        """Optional[:class:`.User`]: Retrieves a user using ID."""
        ...

    @abstractmethod
    def get_users_mapping(self) -> Mapping[UserID, User]:
        """Mapping[:class:`.UserID`, :class:`.User`]: Retrieves all available users as mapping."""
        ...

    @abstractmethod
    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        """Stores a user."""
        ...

    def commit_user(self, user: User, ctx: BaseCacheContext, /) -> User:
        """:class:`.User`: Stores a user and returns it back."""
        self.store_user(user, ctx)
        return user

    @abstractmethod
    def delete_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> None:
        """Deletes a user. Does nothing if user is not cached."""
        ...


class EmptyCache(Cache):
    """Implementation of cache which doesn't actually store anything."""

    __slots__ = ()

    def get_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        return None

    def get_channels_mapping(self) -> Mapping[ChannelID, Channel]:
        return {}

    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> None:
        pass

    def get_message(
        self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Message]:
        return None

    def get_messages_mapping_of(
        self, channel_id: ChannelID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[MessageID, Message]]:
        return None

    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_message(self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /) -> None:
        pass

    def get_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return None

    def get_servers_mapping(self) -> Mapping[ServerID, Server]:
        return {}

    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> None:
        pass

    def get_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> typing.Optional[Role]:
        return None

    def get_roles_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[RoleID, Role]]:
        return None

    def store_role(self, role: Role, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> None:
        pass

    def get_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        return None

    def get_members_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[UserID, Member]]:
        return None

    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> None:
        pass

    def get_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        return None

    def get_users_mapping(self) -> Mapping[UserID, User]:
        return {}

    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        pass

    def delete_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> None:
        pass


K = typing.TypeVar('K')
V = typing.TypeVar('V')


def _put0(
    d: dict[K, typing.Any],
    k: K,
    max_size: int,
    /,
    evict: typing.Optional[Callable[[K], None]] = None,
) -> bool:
    if max_size == 0:
        return False
    if max_size > 0 and k not in d:
        # dicts preserve insertion order, so first keys are the oldest ones
        while len(d) >= max_size:
            oldest = next(iter(d))
            del d[oldest]
            if evict is not None:
                evict(oldest)
    return True


def _put1(d: dict[K, V], k: K, v: V, max_size: int, /) -> None:
    if _put0(d, k, max_size):
        d[k] = v


class MapCache(Cache):
    """Implementation of :class:`.Cache` ABC based on :class:`dict`'s.

    Parameters of this class accept negative value to represent infinite count.
    When partition is full, oldest entries are evicted first.

    Parameters
    ----------
    channels_max_size: :class:`int`
        How many channels can have cache. Defaults to ``-1``.
    messages_max_size: :class:`int`
        How many messages can have cache per channel. Defaults to ``1000``.
    servers_max_size: :class:`int`
        How many servers can have cache. Defaults to ``-1``.
    server_members_max_size: :class:`int`
        How many members can have cache per server. Defaults to ``-1``.
    users_max_size: :class:`int`
        How many users can have cache. Defaults to ``-1``.
    """

    __slots__ = (
        '_channels',
        '_channels_max_size',
        '_messages',
        '_messages_max_size',
        '_roles',
        '_servers',
        '_servers_max_size',
        '_server_members',
        '_server_members_max_size',
        '_users',
        '_users_max_size',
    )

    def __init__(
        self,
        *,
        channels_max_size: int = -1,
        messages_max_size: int = 1000,
        servers_max_size: int = -1,
        server_members_max_size: int = -1,
        users_max_size: int = -1,
    ) -> None:
        self._channels: dict[ChannelID, Channel] = {}
        self._channels_max_size: int = channels_max_size
        self._messages: dict[ChannelID, dict[MessageID, Message]] = {}
        self._messages_max_size: int = messages_max_size
        self._roles: dict[ServerID, dict[RoleID, Role]] = {}
        self._servers: dict[ServerID, Server] = {}
        self._servers_max_size: int = servers_max_size
        self._server_members: dict[ServerID, dict[UserID, Member]] = {}
        self._server_members_max_size: int = server_members_max_size
        self._users: dict[UserID, User] = {}
        self._users_max_size: int = users_max_size

    ############
    # Channels #
    ############
    def get_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> typing.Optional[Channel]:
        return self._channels.get(channel_id)

    def get_channels_mapping(self) -> Mapping[ChannelID, Channel]:
        return self._channels

    def store_channel(self, channel: Channel, ctx: BaseCacheContext, /) -> None:
        _put1(self._channels, channel.id, channel, self._channels_max_size)

    def delete_channel(self, channel_id: ChannelID, ctx: BaseCacheContext, /) -> None:
        self._channels.pop(channel_id, None)
        self._messages.pop(channel_id, None)

    ############
    # Messages #
    ############
    def get_message(
        self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Message]:
        messages = self._messages.get(channel_id)
        if messages:
            return messages.get(message_id)
        return None

    def get_messages_mapping_of(
        self, channel_id: ChannelID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[MessageID, Message]]:
        return self._messages.get(channel_id)

    def store_message(self, message: Message, ctx: BaseCacheContext, /) -> None:
        d = self._messages.get(message.channel_id)
        if d is None:
            if self._messages_max_size == 0:
                return
            self._messages[message.channel_id] = {message.id: message}
        else:
            _put1(d, message.id, message, self._messages_max_size)

    def delete_message(self, channel_id: ChannelID, message_id: MessageID, ctx: BaseCacheContext, /) -> None:
        messages = self._messages.get(channel_id)
        if messages:
            messages.pop(message_id, None)

    ###########
    # Servers #
    ###########
    def get_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> typing.Optional[Server]:
        return self._servers.get(server_id)

    def get_servers_mapping(self) -> Mapping[ServerID, Server]:
        return self._servers

    def store_server(self, server: Server, ctx: BaseCacheContext, /) -> None:
        if not _put0(self._servers, server.id, self._servers_max_size, self._evict_server):
            return
        self._servers[server.id] = server
        self._roles[server.id] = dict(server.roles)

    def delete_server(self, server_id: ServerID, ctx: BaseCacheContext, /) -> None:
        self._servers.pop(server_id, None)
        self._roles.pop(server_id, None)
        self._server_members.pop(server_id, None)

    def _evict_server(self, server_id: ServerID, /) -> None:
        self._roles.pop(server_id, None)
        self._server_members.pop(server_id, None)

    #########
    # Roles #
    #########
    def get_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> typing.Optional[Role]:
        roles = self._roles.get(server_id)
        if roles:
            return roles.get(role_id)
        return None

    def get_roles_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[RoleID, Role]]:
        return self._roles.get(server_id)

    def store_role(self, role: Role, ctx: BaseCacheContext, /) -> None:
        roles = self._roles.get(role.server_id)
        if roles is None:
            self._roles[role.server_id] = {role.id: role}
        else:
            roles[role.id] = role

    def delete_role(self, server_id: ServerID, role_id: RoleID, ctx: BaseCacheContext, /) -> None:
        roles = self._roles.get(server_id)
        if roles:
            roles.pop(role_id, None)

    ##################
    # Server Members #
    ##################
    def get_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> typing.Optional[Member]:
        members = self._server_members.get(member_id.server)
        if members:
            return members.get(member_id.user)
        return None

    def get_members_mapping_of(
        self, server_id: ServerID, ctx: BaseCacheContext, /
    ) -> typing.Optional[Mapping[UserID, Member]]:
        return self._server_members.get(server_id)

    def store_member(self, member: Member, ctx: BaseCacheContext, /) -> None:
        d = self._server_members.get(member.id.server)
        if d is None:
            if self._server_members_max_size == 0:
                return
            self._server_members[member.id.server] = {member.id.user: member}
        else:
            _put1(d, member.id.user, member, self._server_members_max_size)

    def delete_member(self, member_id: MemberID, ctx: BaseCacheContext, /) -> None:
        members = self._server_members.get(member_id.server)
        if members:
            members.pop(member_id.user, None)

    #########
    # Users #
    #########
    def get_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> typing.Optional[User]:
        return self._users.get(user_id)

    def get_users_mapping(self) -> Mapping[UserID, User]:
        return self._users

    def store_user(self, user: User, ctx: BaseCacheContext, /) -> None:
        _put1(self._users, user.id, user, self._users_max_size)

    def delete_user(self, user_id: UserID, ctx: BaseCacheContext, /) -> None:
        self._users.pop(user_id, None)


__all__ = (
    'CacheContextType',
    'BaseCacheContext',
    'UndefinedCacheContext',
    'EventCacheContext',
    '_UNDEFINED',
    '_USER_REQUEST',
    '_LIBRARY_REQUEST',
    'Cache',
    'EmptyCache',
    'MapCache',
)
