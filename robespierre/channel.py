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
import typing

from . import cache as caching
from .asset import Asset
from .base import Base
from .core import UNDEFINED, UndefinedOr, ChannelID, MessageID, ServerID, UserID, RoleID
from .enums import ChannelField, ChannelType
from .permissions import PermissionOverride
from .resolve import SERVER_RESOLVER

if typing.TYPE_CHECKING:
    from .server import Server


@define(slots=True, eq=False)
class BaseChannel(Base):
    """Represents channel on Revolt."""

    id: ChannelID = field(repr=True, kw_only=True)
    """:class:`.ChannelID`: The ID of the channel."""

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, BaseChannel) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def mention(self) -> str:
        """:class:`str`: Returns the channel's mention."""
        return f'<#{self.id}>'

    def get_server_id(self) -> typing.Optional[ServerID]:
        """Optional[:class:`.ServerID`]: The ID of server this channel belongs to, if any."""
        return None

    def get_server(self) -> typing.Optional[Server]:
        """Optional[:class:`.Server`]: The server that channel belongs to, if it is cached."""
        server_id = self.get_server_id()
        if server_id is None:
            return None
        return self.state.cache.get_server(server_id, caching._USER_REQUEST)

    async def resolve_server(self) -> typing.Optional[Server]:
        """|coro|

        Retrieves the server this channel belongs to, from cache or API.

        Returns ``None`` for private channels.

        Raises
        ------
        FetchError
            Retrieving the server failed.
        """
        server_id = self.get_server_id()
        if server_id is None:
            return None
        return await SERVER_RESOLVER.resolve(self.state, server_id)

    def locally_update(self, data: PartialChannel, /) -> None:
        """Locally updates channel with provided data.

        .. warning::
            This is called by library internally to keep cache up to date.
        """

    def locally_clear(self, tag: ChannelField, /) -> None:
        """Locally resets a field of channel to its empty value.

        .. warning::
            This is called by library internally to keep cache up to date.
        """


@define(slots=True, eq=False)
class PartialChannel(BaseChannel):
    """Represents a partial channel on Revolt.

    Unmodified fields will have :data:`.UNDEFINED` value.
    """

    kind: typing.ClassVar[str] = 'channel'

    name: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new channel name. Only for :class:`GroupChannel` and server channels."""

    owner_id: UndefinedOr[UserID] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.UserID`]: The ID of new group owner. Only for :class:`GroupChannel`."""

    description: UndefinedOr[str] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`str`]: The new channel's description."""

    icon: UndefinedOr[Asset] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.Asset`]: The new channel's icon."""

    nsfw: UndefinedOr[bool] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`bool`]: Whether the channel have been marked as NSFW."""

    active: UndefinedOr[bool] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`bool`]: Whether the DM channel is active now. Only for :class:`DMChannel`."""

    permissions: UndefinedOr[int] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`int`]: The new group's permissions raw value. Only for :class:`GroupChannel`."""

    role_permissions: UndefinedOr[dict[RoleID, PermissionOverride]] = field(
        repr=True, kw_only=True, default=UNDEFINED
    )
    """UndefinedOr[Dict[:class:`.RoleID`, :class:`.PermissionOverride`]]: The new permission overrides for roles."""

    default_permissions: UndefinedOr[PermissionOverride] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.PermissionOverride`]: The new permission overrides for everyone."""

    last_message_id: UndefinedOr[MessageID] = field(repr=True, kw_only=True, default=UNDEFINED)
    """UndefinedOr[:class:`.MessageID`]: The last message ID sent in the channel."""

    def is_empty(self) -> bool:
        """:class:`bool`: Whether this partial does not modify anything."""
        return all(
            v is UNDEFINED
            for v in (
                self.name,
                self.owner_id,
                self.description,
                self.icon,
                self.nsfw,
                self.active,
                self.permissions,
                self.role_permissions,
                self.default_permissions,
                self.last_message_id,
            )
        )


@define(slots=True, eq=False)
class SavedMessagesChannel(BaseChannel):
    """Personal "Saved Notes" channel which allows users to save messages."""

    user_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The ID of the user this channel belongs to."""

    @property
    def type(self) -> typing.Literal[ChannelType.saved_messages]:
        """Literal[:attr:`.ChannelType.saved_messages`]: The channel's type."""
        return ChannelType.saved_messages


@define(slots=True, eq=False)
class DMChannel(BaseChannel):
    """Represents a private channel between two users."""

    active: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the DM channel is currently open on both sides."""

    recipient_ids: list[UserID] = field(repr=True, kw_only=True)
    """List[:class:`.UserID`]: The user IDs participating in DM."""

    last_message_id: typing.Optional[MessageID] = field(repr=True, kw_only=True)
    """Optional[:class:`.MessageID`]: The last message ID sent in the channel."""

    def locally_update(self, data: PartialChannel, /) -> None:
        if data.active is not UNDEFINED:
            self.active = data.active
        if data.last_message_id is not UNDEFINED:
            self.last_message_id = data.last_message_id

    @property
    def type(self) -> typing.Literal[ChannelType.private]:
        """Literal[:attr:`.ChannelType.private`]: The channel's type."""
        return ChannelType.private


@define(slots=True, eq=False)
class GroupChannel(BaseChannel):
    """Represents Revolt group channel between 1 or more participants."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The group's name."""

    owner_id: UserID = field(repr=True, kw_only=True)
    """:class:`.UserID`: The user's ID who owns this group."""

    description: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The group description."""

    recipient_ids: list[UserID] = field(repr=True, kw_only=True)
    """List[:class:`.UserID`]: The IDs of users participating in this group."""

    icon: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The group icon."""

    last_message_id: typing.Optional[MessageID] = field(repr=True, kw_only=True)
    """Optional[:class:`.MessageID`]: The last message ID sent in the channel."""

    permissions: typing.Optional[int] = field(repr=True, kw_only=True)
    """Optional[:class:`int`]: The permissions assigned to members of this group.

    .. note::
        This attribute does not apply to the owner of the group.
    """

    nsfw: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this group is marked as not safe for work."""

    def locally_update(self, data: PartialChannel, /) -> None:
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.owner_id is not UNDEFINED:
            self.owner_id = data.owner_id
        if data.description is not UNDEFINED:
            self.description = data.description
        if data.icon is not UNDEFINED:
            self.icon = data.icon
        if data.last_message_id is not UNDEFINED:
            self.last_message_id = data.last_message_id
        if data.permissions is not UNDEFINED:
            self.permissions = data.permissions
        if data.nsfw is not UNDEFINED:
            self.nsfw = data.nsfw

    def locally_clear(self, tag: ChannelField, /) -> None:
        if tag is ChannelField.icon:
            self.icon = None
        elif tag is ChannelField.description:
            self.description = None

    def locally_join(self, user_id: UserID, /) -> None:
        """Locally adds a user to recipients.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        if user_id not in self.recipient_ids:
            self.recipient_ids = [*self.recipient_ids, user_id]

    def locally_leave(self, user_id: UserID, /) -> None:
        """Locally removes a user from recipients.

        .. warning::
            This is called by library internally to keep cache up to date.
        """
        self.recipient_ids = [r for r in self.recipient_ids if r != user_id]

    @property
    def type(self) -> typing.Literal[ChannelType.group]:
        """Literal[:attr:`.ChannelType.group`]: The channel's type."""
        return ChannelType.group


@define(slots=True, eq=False)
class BaseServerChannel(BaseChannel):
    server_id: ServerID = field(repr=True, kw_only=True)
    """:class:`.ServerID`: The server ID that channel belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The display name of the channel."""

    description: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The channel description."""

    icon: typing.Optional[Asset] = field(repr=True, kw_only=True)
    """Optional[:class:`.Asset`]: The custom channel icon."""

    default_permissions: typing.Optional[PermissionOverride] = field(repr=True, kw_only=True)
    """Optional[:class:`.PermissionOverride`]: Default permissions assigned to users in this channel."""

    role_permissions: dict[RoleID, PermissionOverride] = field(repr=True, kw_only=True)
    """Dict[:class:`.RoleID`, :class:`.PermissionOverride`]: The permissions assigned based on role to this channel."""

    nsfw: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this channel is marked as not safe for work."""

    def get_server_id(self) -> ServerID:
        return self.server_id

    def locally_update(self, data: PartialChannel, /) -> None:
        if data.name is not UNDEFINED:
            self.name = data.name
        if data.description is not UNDEFINED:
            self.description = data.description
        if data.icon is not UNDEFINED:
            self.icon = data.icon
        if data.nsfw is not UNDEFINED:
            self.nsfw = data.nsfw
        if data.role_permissions is not UNDEFINED:
            self.role_permissions = data.role_permissions
        if data.default_permissions is not UNDEFINED:
            self.default_permissions = data.default_permissions

    def locally_clear(self, tag: ChannelField, /) -> None:
        if tag is ChannelField.icon:
            self.icon = None
        elif tag is ChannelField.description:
            self.description = None
        elif tag is ChannelField.default_permissions:
            self.default_permissions = None


@define(slots=True, eq=False)
class TextChannel(BaseServerChannel):
    """Represents a text channel that belongs to a server on Revolt."""

    last_message_id: typing.Optional[MessageID] = field(repr=True, kw_only=True)
    """Optional[:class:`.MessageID`]: The last message ID sent in the channel."""

    def locally_update(self, data: PartialChannel, /) -> None:
        BaseServerChannel.locally_update(self, data)
        if data.last_message_id is not UNDEFINED:
            self.last_message_id = data.last_message_id

    @property
    def type(self) -> typing.Literal[ChannelType.text]:
        """Literal[:attr:`.ChannelType.text`]: The channel's type."""
        return ChannelType.text


@define(slots=True, eq=False)
class VoiceChannel(BaseServerChannel):
    """Represents a voice channel that belongs to a server on Revolt."""

    @property
    def type(self) -> typing.Literal[ChannelType.voice]:
        """Literal[:attr:`.ChannelType.voice`]: The channel's type."""
        return ChannelType.voice


PrivateChannel = typing.Union[SavedMessagesChannel, DMChannel, GroupChannel]
ServerChannel = typing.Union[TextChannel, VoiceChannel]
Channel = typing.Union[PrivateChannel, ServerChannel]

__all__ = (
    'BaseChannel',
    'PartialChannel',
    'SavedMessagesChannel',
    'DMChannel',
    'GroupChannel',
    'BaseServerChannel',
    'TextChannel',
    'VoiceChannel',
    'PrivateChannel',
    'ServerChannel',
    'Channel',
)
