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

from copy import copy
import typing

from attrs import Factory, define, field

from . import cache as caching, utils
from .channel import (
    PartialChannel,
    GroupChannel,
    BaseServerChannel,
    Channel,
)
from .core import ChannelID, MemberID, MessageID, RoleID, ServerID, UserID
from .enums import ChannelField, MemberField, RelationshipStatus, RoleField, ServerField, UserField
from .patch import apply_patch
from .server import PartialRole, Role, PartialServer, Server, PartialMember, Member
from .user import Relationship, PartialUser, User

if typing.TYPE_CHECKING:
    from .message import PartialMessage, Message
    from .shard import Shard


@define(slots=True)
class BaseEvent:
    """Base class for all events."""

    event_name: typing.ClassVar[str] = ''

    def before_dispatch(self) -> None:
        """Called before handlers are invoked. Computes snapshots from cache."""
        pass

    def process(self) -> typing.Any:
        """Any: Applies the event to cache. Called right after :meth:`.before_dispatch`."""
        pass


@define(slots=True)
class ShardEvent(BaseEvent):
    """Base class for events arrived over WebSocket."""

    shard: Shard = field(repr=False, kw_only=True, eq=False)
    """:class:`.Shard`: The shard the event arrived on."""

    cache_context: caching.EventCacheContext = field(
        default=Factory(
            lambda self: caching.EventCacheContext(type=caching.CacheContextType.event, event=self),
            takes_self=True,
        ),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.EventCacheContext`: The cache context used."""

    @property
    def cache(self) -> caching.Cache:
        """:class:`.Cache`: The cache the event is applied to."""
        return self.shard.state.cache


@define(slots=True)
class ErrorEvent(ShardEvent):
    """Dispatched when the server reported an error, usually right after authentication."""

    event_name: typing.ClassVar[typing.Literal['error']] = 'error'

    error: str = field(repr=True, kw_only=True)
    """:class:`str`: The error type, such as ``'InvalidSession'``."""


@define(slots=True)
class AuthenticatedEvent(ShardEvent):
    """Dispatched when the WebSocket was successfully authenticated."""

    event_name: typing.ClassVar[typing.Literal['authenticated']] = 'authenticated'


@define(slots=True)
class PongEvent(ShardEvent):
    """Dispatched when the server replied to ping."""

    event_name: typing.ClassVar[typing.Literal['pong']] = 'pong'

    time: int = field(repr=True, kw_only=True)
    """:class:`int`: The value sent in ping."""


@define(slots=True)
class ReadyEvent(ShardEvent):
    """Dispatched when initial state is available.

    .. warning::
        This event may be dispatched multiple times due to reconnects.
    """

    event_name: typing.ClassVar[typing.Literal['ready']] = 'ready'

    users: list[User] = field(repr=True, kw_only=True)
    """List[:class:`.User`]: The users that the client can see (from DMs, groups, and relationships)."""

    servers: list[Server] = field(repr=True, kw_only=True)
    """List[:class:`.Server`]: The servers the connected user is in."""

    channels: list[Channel] = field(repr=True, kw_only=True)
    """List[:class:`.Channel`]: The DM channels, server channels and groups the connected user participates in."""

    members: list[Member] = field(repr=True, kw_only=True)
    """List[:class:`.Member`]: The own members for servers."""

    def before_dispatch(self) -> None:
        # People expect client.me to be available upon `ReadyEvent` dispatching
        state = self.shard.state
        for user in self.users:
            if user.relationship is RelationshipStatus.user:
                state.me_id = user.id
                break

    def process(self) -> bool:
        cache = self.cache
        ctx = self.cache_context

        for u in self.users:
            cache.store_user(u, ctx)
        for s in self.servers:
            cache.store_server(s, ctx)
        for c in self.channels:
            cache.store_channel(c, ctx)
        for m in self.members:
            cache.store_member(m, ctx)
        return True


@define(slots=True)
class MessageCreateEvent(ShardEvent):
    """Dispatched when someone sends message in a channel."""

    event_name: typing.ClassVar[typing.Literal['message_create']] = 'message_create'

    message: Message = field(repr=True, kw_only=True)
    """:class:`.Message`: The message sent."""

    def process(self) -> bool:
        cache = self.cache
        message = self.message

        cache.store_message(message, self.cache_context)

        channel = cache.get_channel(message.channel_id, self.cache_context)
        if channel is not None:
            partial = PartialChannel(state=message.state, id=message.channel_id, last_message_id=message.id)
            cache.store_channel(apply_patch(channel, partial), self.cache_context)
        return True


@define(slots=True)
class MessageUpdateEvent(ShardEvent):
    """Dispatched when the message is updated."""

    event_name: typing.ClassVar[typing.Literal['message_update']] = 'message_update'

    data: PartialMessage = field(repr=True, kw_only=True)
    """:class:`.PartialMessage`: The fields that were updated."""

    before: typing.Optional[Message] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The message as it was before being updated, if available."""

    after: typing.Optional[Message] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The message as it was updated, if available."""

    @property
    def message_id(self) -> MessageID:
        """:class:`.MessageID`: The updated message's ID."""
        return self.data.id

    @property
    def channel_id(self) -> ChannelID:
        """:class:`.ChannelID`: The channel's ID the message is in."""
        return self.data.channel_id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_message(self.data.channel_id, self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data)

    def process(self) -> bool:
        if self.after is None:
            return False
        self.cache.store_message(self.after, self.cache_context)
        return True


@define(slots=True)
class MessageDeleteEvent(ShardEvent):
    """Dispatched when the message is deleted in channel."""

    event_name: typing.ClassVar[typing.Literal['message_delete']] = 'message_delete'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID the message was in."""

    message_id: MessageID = field(repr=True, kw_only=True)
    """:class:`.MessageID`: The deleted message's ID."""

    message: typing.Optional[Message] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Message`]: The deleted message object, if available."""

    def before_dispatch(self) -> None:
        self.message = self.cache.get_message(self.channel_id, self.message_id, self.cache_context)

    def process(self) -> bool:
        self.cache.delete_message(self.channel_id, self.message_id, self.cache_context)
        return True


@define(slots=True)
class ChannelCreateEvent(ShardEvent):
    """Dispatched when the channel is created, or became open to the connected user."""

    event_name: typing.ClassVar[typing.Literal['channel_create']] = 'channel_create'

    channel: Channel = field(repr=True, kw_only=True)
    """:class:`.Channel`: The created channel."""

    def process(self) -> bool:
        cache = self.cache
        channel = self.channel
        cache.store_channel(channel, self.cache_context)

        if isinstance(channel, BaseServerChannel):
            server = cache.get_server(channel.server_id, self.cache_context)
            if server is not None and channel.id not in server.channel_ids:
                server = copy(server)
                server.channel_ids = [*server.channel_ids, channel.id]
                cache.store_server(server, self.cache_context)
        return True


@define(slots=True)
class ChannelUpdateEvent(ShardEvent):
    """Dispatched when the channel is updated."""

    event_name: typing.ClassVar[typing.Literal['channel_update']] = 'channel_update'

    data: PartialChannel = field(repr=True, kw_only=True)
    """:class:`.PartialChannel`: The fields that were updated."""

    clear: tuple[ChannelField, ...] = field(factory=tuple, repr=True, kw_only=True)
    """Tuple[:class:`.ChannelField`, ...]: The fields that were reset."""

    before: typing.Optional[Channel] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Channel`]: The channel as it was before being updated, if available."""

    after: typing.Optional[Channel] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Channel`]: The channel as it was updated, if available."""

    @property
    def channel_id(self) -> ChannelID:
        """:class:`.ChannelID`: The updated channel's ID."""
        return self.data.id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_channel(self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data, self.clear)

    def process(self) -> bool:
        if self.after is None:
            return False
        self.cache.store_channel(self.after, self.cache_context)
        return True


@define(slots=True)
class ChannelDeleteEvent(ShardEvent):
    """Dispatched when the server channel or group is deleted or became hidden for the connected user."""

    event_name: typing.ClassVar[typing.Literal['channel_delete']] = 'channel_delete'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID that got deleted or hidden."""

    channel: typing.Optional[Channel] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Channel`]: The deleted channel object, if available."""

    def before_dispatch(self) -> None:
        self.channel = self.cache.get_channel(self.channel_id, self.cache_context)

    def process(self) -> bool:
        cache = self.cache
        cache.delete_channel(self.channel_id, self.cache_context)

        if isinstance(self.channel, BaseServerChannel):
            server = cache.get_server(self.channel.server_id, self.cache_context)
            if server is not None and self.channel_id in server.channel_ids:
                server = copy(server)
                server.channel_ids = [c for c in server.channel_ids if c != self.channel_id]
                cache.store_server(server, self.cache_context)
        return True


@define(slots=True)
class GroupRecipientAddEvent(ShardEvent):
    """Dispatched when recipient is added to the group."""

    event_name: typing.ClassVar[typing.Literal['recipient_add']] = 'recipient_add'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The affected group's ID."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who was added to the group."""

    group: typing.Optional[GroupChannel] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.GroupChannel`]: The group in cache (in previous state as it had no recipient), if available."""

    def before_dispatch(self) -> None:
        group = self.cache.get_channel(self.channel_id, self.cache_context)
        if isinstance(group, GroupChannel):
            self.group = group

    def process(self) -> bool:
        if self.group is None:
            return False
        group = copy(self.group)
        group.locally_join(self.user_id)
        self.cache.store_channel(group, self.cache_context)
        return True


@define(slots=True)
class GroupRecipientRemoveEvent(ShardEvent):
    """Dispatched when recipient is removed from the group."""

    event_name: typing.ClassVar[typing.Literal['recipient_remove']] = 'recipient_remove'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The affected group's ID."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who was removed from the group."""

    group: typing.Optional[GroupChannel] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.GroupChannel`]: The group in cache (in previous state as it had recipient), if available."""

    def before_dispatch(self) -> None:
        group = self.cache.get_channel(self.channel_id, self.cache_context)
        if isinstance(group, GroupChannel):
            self.group = group

    def process(self) -> bool:
        if self.group is None:
            return False
        group = copy(self.group)
        group.locally_leave(self.user_id)
        self.cache.store_channel(group, self.cache_context)
        return True


@define(slots=True)
class ChannelStartTypingEvent(ShardEvent):
    """Dispatched when someone starts typing in a channel."""

    event_name: typing.ClassVar[typing.Literal['channel_start_typing']] = 'channel_start_typing'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID where user started typing in."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who started typing."""


@define(slots=True)
class ChannelStopTypingEvent(ShardEvent):
    """Dispatched when someone stopped typing in a channel."""

    event_name: typing.ClassVar[typing.Literal['channel_stop_typing']] = 'channel_stop_typing'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID where user stopped typing in."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who stopped typing."""


@define(slots=True)
class MessageAckEvent(ShardEvent):
    """Dispatched when the connected user acknowledges the message in a channel (probably from remote device)."""

    event_name: typing.ClassVar[typing.Literal['message_ack']] = 'message_ack'

    channel_id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The channel's ID the message is in."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who acknowledged the message."""

    message_id: MessageID = field(repr=True, kw_only=True)
    """:class:`.MessageID`: The acknowledged message's ID."""


@define(slots=True)
class ServerUpdateEvent(ShardEvent):
    """Dispatched when the server details are updated."""

    event_name: typing.ClassVar[typing.Literal['server_update']] = 'server_update'

    data: PartialServer = field(repr=True, kw_only=True)
    """:class:`.PartialServer`: The fields that were updated."""

    clear: tuple[ServerField, ...] = field(factory=tuple, repr=True, kw_only=True)
    """Tuple[:class:`.ServerField`, ...]: The fields that were reset."""

    before: typing.Optional[Server] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Server`]: The server as it was before being updated, if available."""

    after: typing.Optional[Server] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Server`]: The server as it was updated, if available."""

    @property
    def server_id(self) -> ServerID:
        """:class:`.ServerID`: The updated server's ID."""
        return self.data.id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_server(self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data, self.clear)

    def process(self) -> bool:
        if self.after is None:
            return False
        self.cache.store_server(self.after, self.cache_context)
        return True


@define(slots=True)
class ServerDeleteEvent(ShardEvent):
    """Dispatched when the server is deleted, or the connected user left it."""

    event_name: typing.ClassVar[typing.Literal['server_delete']] = 'server_delete'

    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID that got deleted."""

    server: typing.Optional[Server] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Server`]: The deleted server object, if available."""

    def before_dispatch(self) -> None:
        self.server = self.cache.get_server(self.server_id, self.cache_context)

    def process(self) -> bool:
        cache = self.cache
        if self.server is not None:
            for channel_id in self.server.channel_ids:
                cache.delete_channel(channel_id, self.cache_context)
        cache.delete_server(self.server_id, self.cache_context)
        return True


@define(slots=True)
class ServerMemberUpdateEvent(ShardEvent):
    """Dispatched when the member details are updated."""

    event_name: typing.ClassVar[typing.Literal['server_member_update']] = 'server_member_update'

    data: PartialMember = field(repr=True, kw_only=True)
    """:class:`.PartialMember`: The fields that were updated."""

    clear: tuple[MemberField, ...] = field(factory=tuple, repr=True, kw_only=True)
    """Tuple[:class:`.MemberField`, ...]: The fields that were reset."""

    before: typing.Optional[Member] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The member as it was before being updated, if available."""

    after: typing.Optional[Member] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The member as it was updated, if available."""

    @property
    def member_id(self) -> MemberID:
        """:class:`.MemberID`: The updated member's composite ID."""
        return self.data.id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_member(self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data, self.clear)

    def process(self) -> bool:
        if self.after is None:
            return False
        self.cache.store_member(self.after, self.cache_context)
        return True


@define(slots=True)
class ServerMemberJoinEvent(ShardEvent):
    """Dispatched when the user got added to the server."""

    event_name: typing.ClassVar[typing.Literal['server_member_join']] = 'server_member_join'

    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID the user joined."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The joined user's ID."""

    member: typing.Optional[Member] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The joined member. Available after :meth:`.before_dispatch`."""

    def before_dispatch(self) -> None:
        self.member = Member(
            state=self.shard.state,
            id=MemberID(server=self.server_id, user=self.user_id),
            joined_at=utils.utcnow(),
            nickname=None,
            avatar=None,
            roles=[],
        )

    def process(self) -> bool:
        if self.member is None:
            return False
        self.cache.store_member(self.member, self.cache_context)
        return True


@define(slots=True)
class ServerMemberLeaveEvent(ShardEvent):
    """Dispatched when the member (or connected user) got removed from server."""

    event_name: typing.ClassVar[typing.Literal['server_member_leave']] = 'server_member_leave'

    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID from which the user was removed from."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The removed user's ID."""

    member: typing.Optional[Member] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Member`]: The removed member object, if available."""

    def before_dispatch(self) -> None:
        self.member = self.cache.get_member(MemberID(server=self.server_id, user=self.user_id), self.cache_context)

    def process(self) -> bool:
        cache = self.cache
        if self.user_id == self.shard.state.me_id:
            server = cache.get_server(self.server_id, self.cache_context)
            if server is not None:
                for channel_id in server.channel_ids:
                    cache.delete_channel(channel_id, self.cache_context)
            cache.delete_server(self.server_id, self.cache_context)
        else:
            cache.delete_member(MemberID(server=self.server_id, user=self.user_id), self.cache_context)
        return True


@define(slots=True)
class ServerRoleUpdateEvent(ShardEvent):
    """Dispatched when the role in server is updated."""

    event_name: typing.ClassVar[typing.Literal['server_role_update']] = 'server_role_update'

    data: PartialRole = field(repr=True, kw_only=True)
    """:class:`.PartialRole`: The fields that were updated."""

    clear: tuple[RoleField, ...] = field(factory=tuple, repr=True, kw_only=True)
    """Tuple[:class:`.RoleField`, ...]: The fields that were reset."""

    before: typing.Optional[Role] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Role`]: The role as it was before being updated, if available."""

    after: typing.Optional[Role] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Role`]: The role as it was updated, if available."""

    @property
    def server_id(self) -> ServerID:
        """:class:`.ServerID`: The server's ID the role is in."""
        return self.data.server_id

    @property
    def role_id(self) -> RoleID:
        """:class:`.RoleID`: The updated role's ID."""
        return self.data.id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_role(self.data.server_id, self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data, self.clear)

    def process(self) -> bool:
        if self.after is None:
            return False
        cache = self.cache
        cache.store_role(self.after, self.cache_context)

        server = cache.get_server(self.data.server_id, self.cache_context)
        if server is not None:
            server = copy(server)
            server.locally_upsert_role(self.after)
            cache.store_server(server, self.cache_context)
        return True


@define(slots=True)
class ServerRoleDeleteEvent(ShardEvent):
    """Dispatched when the role is deleted from server."""

    event_name: typing.ClassVar[typing.Literal['server_role_delete']] = 'server_role_delete'

    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server's ID the role was in."""

    role_id: RoleID = field(repr=True, kw_only=True)
    """:class:`.RoleID`: The deleted role's ID."""

    role: typing.Optional[Role] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.Role`]: The deleted role object, if available."""

    def before_dispatch(self) -> None:
        self.role = self.cache.get_role(self.server_id, self.role_id, self.cache_context)

    def process(self) -> bool:
        cache = self.cache
        cache.delete_role(self.server_id, self.role_id, self.cache_context)

        server = cache.get_server(self.server_id, self.cache_context)
        if server is not None and self.role_id in server.roles:
            server = copy(server)
            server.locally_remove_role(self.role_id)
            cache.store_server(server, self.cache_context)
        return True


@define(slots=True)
class UserUpdateEvent(ShardEvent):
    """Dispatched when the user details are updated."""

    event_name: typing.ClassVar[typing.Literal['user_update']] = 'user_update'

    data: PartialUser = field(repr=True, kw_only=True)
    """:class:`.PartialUser`: The fields that were updated."""

    clear: tuple[UserField, ...] = field(factory=tuple, repr=True, kw_only=True)
    """Tuple[:class:`.UserField`, ...]: The fields that were reset."""

    before: typing.Optional[User] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.User`]: The user as it was before being updated, if available."""

    after: typing.Optional[User] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.User`]: The user as it was updated, if available."""

    @property
    def user_id(self) -> UserID:
        """:class:`.UserID`: The updated user's ID."""
        return self.data.id

    def before_dispatch(self) -> None:
        self.before = self.cache.get_user(self.data.id, self.cache_context)
        self.after = apply_patch(self.before, self.data, self.clear)

    def process(self) -> bool:
        if self.after is None:
            return False
        self.cache.store_user(self.after, self.cache_context)
        return True


@define(slots=True)
class UserRelationshipEvent(ShardEvent):
    """Dispatched when the relationship with user was updated."""

    event_name: typing.ClassVar[typing.Literal['user_relationship']] = 'user_relationship'

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The connected user's ID."""

    other_user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The other user's ID."""

    status: RelationshipStatus = field(repr=True, kw_only=True)
    """:class:`.RelationshipStatus`: The new relationship with the other user."""

    before: typing.Optional[User] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.User`]: The other user as it was before being updated, if available."""

    after: typing.Optional[User] = field(default=None, repr=True, kw_only=True)
    """Optional[:class:`.User`]: The other user as it was updated, if available."""

    def before_dispatch(self) -> None:
        self.before = self.cache.get_user(self.other_user_id, self.cache_context)
        if self.before is not None:
            after = copy(self.before)
            after.relationship = self.status
            self.after = after

    def process(self) -> bool:
        cache = self.cache

        me = cache.get_user(self.user_id, self.cache_context)
        if me is not None:
            me = copy(me)
            relations = [r for r in me.relations if r.id != self.other_user_id]
            if self.status is not RelationshipStatus.none:
                relations.append(Relationship(id=self.other_user_id, status=self.status))
            me.relations = relations
            cache.store_user(me, self.cache_context)

        if self.after is None:
            return False
        cache.store_user(self.after, self.cache_context)
        return True


ClientEvent = typing.Union[
    ErrorEvent,
    AuthenticatedEvent,
    PongEvent,
    ReadyEvent,
    MessageCreateEvent,
    MessageUpdateEvent,
    MessageDeleteEvent,
    ChannelCreateEvent,
    ChannelUpdateEvent,
    ChannelDeleteEvent,
    GroupRecipientAddEvent,
    GroupRecipientRemoveEvent,
    ChannelStartTypingEvent,
    ChannelStopTypingEvent,
    MessageAckEvent,
    ServerUpdateEvent,
    ServerDeleteEvent,
    ServerMemberUpdateEvent,
    ServerMemberJoinEvent,
    ServerMemberLeaveEvent,
    ServerRoleUpdateEvent,
    ServerRoleDeleteEvent,
    UserUpdateEvent,
    UserRelationshipEvent,
]

__all__ = (
    'BaseEvent',
    'ShardEvent',
    'ErrorEvent',
    'AuthenticatedEvent',
    'PongEvent',
    'ReadyEvent',
    'MessageCreateEvent',
    'MessageUpdateEvent',
    'MessageDeleteEvent',
    'ChannelCreateEvent',
    'ChannelUpdateEvent',
    'ChannelDeleteEvent',
    'GroupRecipientAddEvent',
    'GroupRecipientRemoveEvent',
    'ChannelStartTypingEvent',
    'ChannelStopTypingEvent',
    'MessageAckEvent',
    'ServerUpdateEvent',
    'ServerDeleteEvent',
    'ServerMemberUpdateEvent',
    'ServerMemberJoinEvent',
    'ServerMemberLeaveEvent',
    'ServerRoleUpdateEvent',
    'ServerRoleDeleteEvent',
    'UserUpdateEvent',
    'UserRelationshipEvent',
    'ClientEvent',
)
