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

from datetime import datetime
import sys
import typing

from .asset import AssetMetadata, Asset
from .channel import (
    PartialChannel,
    SavedMessagesChannel,
    DMChannel,
    GroupChannel,
    TextChannel,
    VoiceChannel,
    Channel,
)
from .core import (
    UNDEFINED,
    ChannelID,
    ServerID,
    MessageID,
    UserID,
    RoleID,
    AttachmentID,
    MemberID,
)
from .enums import (
    AssetMetadataType,
    ChannelField,
    ServerField,
    MemberField,
    RoleField,
    UserField,
    Presence,
    RelationshipStatus,
)
from .errors import ProtocolDecodeError
from .events import (
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
)
from .gateway import (
    Authenticate,
    AuthenticateBot,
    BeginTyping,
    EndTyping,
    Ping,
    ServerEvent,
)
from .message import (
    SystemMessage,
    PartialMessage,
    Message,
)
from .permissions import Permissions, PermissionOverride
from .server import (
    Category,
    SystemMessageChannels,
    PartialRole,
    Role,
    PartialServer,
    Server,
    PartialMember,
    Member,
)
from .user import (
    UserStatus,
    UserProfile,
    Relationship,
    BotUserInfo,
    PartialUser,
    User,
)
from .utils import _UTC

if typing.TYPE_CHECKING:
    from collections.abc import Callable

    from . import raw
    from .events import ClientEvent
    from .shard import Shard
    from .state import State

if sys.version_info >= (3, 11):
    _parse_dt = datetime.fromisoformat
else:
    # datetime.fromisoformat in Python 3.10 doesn't parse ISO8601 timestamps, so we have to do it ourselves
    # Example: 2025-02-03T19:39:34.263Z

    _strptime = datetime.strptime

    def _parse_dt(date_string: str, /) -> datetime:
        return _strptime(date_string, '%Y-%m-%dT%H:%M:%S.%fZ').replace(tzinfo=_UTC)


F = typing.TypeVar('F')

# Errors raised by parsers when payload does not have expected shape
_STRUCTURAL_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def _parse_clear(cls: Callable[[str], F], payload: dict[str, typing.Any], /) -> tuple[F, ...]:
    # Older servers send single field instead of a list
    clear = payload.get('clear')
    if clear is None:
        return ()
    if isinstance(clear, str):
        return (cls(clear),)
    if not isinstance(clear, list):
        raise TypeError(f"'clear' must be a list or str, not {type(clear).__name__}")
    return tuple(map(cls, clear))


def _expect(value: typing.Any, tp: type, name: str, /) -> typing.Any:
    # bool is an int subclass, but never an acceptable integer on wire
    if not isinstance(value, tp) or (tp is int and isinstance(value, bool)):
        raise TypeError(f'{name!r} must be {tp.__name__}, not {type(value).__name__}')
    return value


class Parser:
    """An factory that produces wrapper objects from raw data.

    Every ``parse_*`` method raises :class:`KeyError`, :class:`TypeError` or :class:`ValueError`
    when the payload is malformed; :meth:`parse_event` converts these into :class:`.ProtocolDecodeError`.

    Attributes
    ----------
    state: :class:`.State`
        The state the parser is attached to.
    """

    __slots__ = (
        'state',
        '_channel_parsers',
        '_event_parsers',
    )

    def __init__(self, *, state: State) -> None:
        self.state: State = state
        self._channel_parsers: dict[str, Callable[[typing.Any], Channel]] = {
            'SavedMessages': self.parse_saved_messages_channel,
            'DirectMessage': self.parse_direct_message_channel,
            'Group': self.parse_group_channel,
            'TextChannel': self.parse_text_channel,
            'VoiceChannel': self.parse_voice_channel,
        }
        self._event_parsers: dict[str, Callable[[Shard, typing.Any], ClientEvent]] = {
            'Error': self.parse_error_event,
            'Authenticated': self.parse_authenticated_event,
            'Pong': self.parse_pong_event,
            'Ready': self.parse_ready_event,
            'Message': self.parse_message_event,
            'MessageUpdate': self.parse_message_update_event,
            'MessageDelete': self.parse_message_delete_event,
            'ChannelCreate': self.parse_channel_create_event,
            'ChannelUpdate': self.parse_channel_update_event,
            'ChannelDelete': self.parse_channel_delete_event,
            'ChannelGroupJoin': self.parse_channel_group_join_event,
            'ChannelGroupLeave': self.parse_channel_group_leave_event,
            'ChannelStartTyping': self.parse_channel_start_typing_event,
            'ChannelStopTyping': self.parse_channel_stop_typing_event,
            'ChannelAck': self.parse_channel_ack_event,
            'ServerUpdate': self.parse_server_update_event,
            'ServerDelete': self.parse_server_delete_event,
            'ServerMemberUpdate': self.parse_server_member_update_event,
            'ServerMemberJoin': self.parse_server_member_join_event,
            'ServerMemberLeave': self.parse_server_member_leave_event,
            'ServerRoleUpdate': self.parse_server_role_update_event,
            'ServerRoleDelete': self.parse_server_role_delete_event,
            'UserUpdate': self.parse_user_update_event,
            'UserRelationship': self.parse_user_relationship_event,
        }

    # Events

    def parse_event(self, shard: Shard, payload: typing.Any, /) -> ClientEvent:
        """Parses a message received over WebSocket.

        Unknown keys are ignored.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The decoded JSON message.

        Raises
        ------
        ProtocolDecodeError
            The message has unknown ``type``, or does not have expected shape.

        Returns
        -------
        :class:`ClientEvent`
            The parsed event.
        """
        if not isinstance(payload, dict):
            raise ProtocolDecodeError(None, f'expected an object, got {type(payload).__name__}', payload)

        tag = payload.get('type')
        if not isinstance(tag, str):
            raise ProtocolDecodeError(None, "missing or non-string 'type' discriminator", payload)

        try:
            parser = self._event_parsers[tag]
        except KeyError:
            raise ProtocolDecodeError(tag, 'unknown message type', payload) from None

        try:
            return parser(shard, payload)
        except _STRUCTURAL_ERRORS as exc:
            if isinstance(exc, KeyError):
                reason = f'missing key or unknown value {exc.args[0]!r}'
            else:
                reason = str(exc)
            raise ProtocolDecodeError(tag, reason, payload) from exc

    def parse_error_event(self, shard: Shard, payload: raw.ClientErrorEvent, /) -> ErrorEvent:
        if 'message' in payload:
            return ErrorEvent(shard=shard, error=_expect(payload['message'], str, 'message'))
        return ErrorEvent(shard=shard, error=_expect(payload['error'], str, 'error'))

    def parse_authenticated_event(self, shard: Shard, payload: raw.ClientAuthenticatedEvent, /) -> AuthenticatedEvent:
        return AuthenticatedEvent(shard=shard)

    def parse_pong_event(self, shard: Shard, payload: raw.ClientPongEvent, /) -> PongEvent:
        return PongEvent(shard=shard, time=_expect(payload['time'], int, 'time'))

    def parse_ready_event(self, shard: Shard, payload: raw.ClientReadyEvent, /) -> ReadyEvent:
        """Parses a Ready event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ReadyEvent`
            The parsed ready event object.
        """
        return ReadyEvent(
            shard=shard,
            users=list(map(self.parse_user, payload['users'])),
            servers=list(map(self.parse_server, payload['servers'])),
            channels=list(map(self.parse_channel, payload['channels'])),
            members=list(map(self.parse_member, payload['members'])),
        )

    def parse_message_event(self, shard: Shard, payload: raw.ClientMessageEvent, /) -> MessageCreateEvent:
        """Parses a Message event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`MessageCreateEvent`
            The parsed message create event object.
        """
        return MessageCreateEvent(shard=shard, message=self.parse_message(payload))

    def parse_message_update_event(self, shard: Shard, payload: raw.ClientMessageUpdateEvent, /) -> MessageUpdateEvent:
        """Parses a MessageUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`MessageUpdateEvent`
            The parsed message update event object.
        """
        data = payload['data']
        edited_at = data.get('edited')
        embeds = data.get('embeds')

        return MessageUpdateEvent(
            shard=shard,
            data=PartialMessage(
                state=self.state,
                id=MessageID(payload['id']),
                channel_id=ChannelID(payload['channel']),
                content=UNDEFINED if 'content' not in data else _expect(data['content'], str, 'content'),
                edited_at=UNDEFINED if edited_at is None else _parse_dt(edited_at),
                embeds=UNDEFINED if embeds is None else list(embeds),
            ),
            before=None,
            after=None,
        )

    def parse_message_delete_event(self, shard: Shard, payload: raw.ClientMessageDeleteEvent, /) -> MessageDeleteEvent:
        return MessageDeleteEvent(
            shard=shard,
            channel_id=ChannelID(payload['channel']),
            message_id=MessageID(payload['id']),
            message=None,
        )

    def parse_channel_create_event(self, shard: Shard, payload: raw.ClientChannelCreateEvent, /) -> ChannelCreateEvent:
        """Parses a ChannelCreate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ChannelCreateEvent`
            The parsed channel create event object.
        """
        return ChannelCreateEvent(shard=shard, channel=self.parse_channel(payload))

    def parse_channel_update_event(self, shard: Shard, payload: raw.ClientChannelUpdateEvent, /) -> ChannelUpdateEvent:
        """Parses a ChannelUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ChannelUpdateEvent`
            The parsed channel update event object.
        """
        return ChannelUpdateEvent(
            shard=shard,
            data=self.parse_partial_channel(ChannelID(payload['id']), payload['data']),
            clear=_parse_clear(ChannelField, payload),
            before=None,
            after=None,
        )

    def parse_channel_delete_event(self, shard: Shard, payload: raw.ClientChannelDeleteEvent, /) -> ChannelDeleteEvent:
        return ChannelDeleteEvent(shard=shard, channel_id=ChannelID(payload['id']), channel=None)

    def parse_channel_group_join_event(
        self, shard: Shard, payload: raw.ClientChannelGroupJoinEvent, /
    ) -> GroupRecipientAddEvent:
        return GroupRecipientAddEvent(
            shard=shard,
            channel_id=ChannelID(payload['id']),
            user_id=UserID(payload['user']),
            group=None,
        )

    def parse_channel_group_leave_event(
        self, shard: Shard, payload: raw.ClientChannelGroupLeaveEvent, /
    ) -> GroupRecipientRemoveEvent:
        return GroupRecipientRemoveEvent(
            shard=shard,
            channel_id=ChannelID(payload['id']),
            user_id=UserID(payload['user']),
            group=None,
        )

    def parse_channel_start_typing_event(
        self, shard: Shard, payload: raw.ClientChannelStartTypingEvent, /
    ) -> ChannelStartTypingEvent:
        return ChannelStartTypingEvent(
            shard=shard,
            channel_id=ChannelID(payload['id']),
            user_id=UserID(payload['user']),
        )

    def parse_channel_stop_typing_event(
        self, shard: Shard, payload: raw.ClientChannelStopTypingEvent, /
    ) -> ChannelStopTypingEvent:
        return ChannelStopTypingEvent(
            shard=shard,
            channel_id=ChannelID(payload['id']),
            user_id=UserID(payload['user']),
        )

    def parse_channel_ack_event(self, shard: Shard, payload: raw.ClientChannelAckEvent, /) -> MessageAckEvent:
        return MessageAckEvent(
            shard=shard,
            channel_id=ChannelID(payload['id']),
            user_id=UserID(payload['user']),
            message_id=MessageID(payload['message_id']),
        )

    def parse_server_update_event(self, shard: Shard, payload: raw.ClientServerUpdateEvent, /) -> ServerUpdateEvent:
        """Parses a ServerUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ServerUpdateEvent`
            The parsed server update event object.
        """
        return ServerUpdateEvent(
            shard=shard,
            data=self.parse_partial_server(ServerID(payload['id']), payload['data']),
            clear=_parse_clear(ServerField, payload),
            before=None,
            after=None,
        )

    def parse_server_delete_event(self, shard: Shard, payload: raw.ClientServerDeleteEvent, /) -> ServerDeleteEvent:
        return ServerDeleteEvent(shard=shard, server_id=ServerID(payload['id']), server=None)

    def parse_server_member_update_event(
        self, shard: Shard, payload: raw.ClientServerMemberUpdateEvent, /
    ) -> ServerMemberUpdateEvent:
        """Parses a ServerMemberUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ServerMemberUpdateEvent`
            The parsed server member update event object.
        """
        return ServerMemberUpdateEvent(
            shard=shard,
            data=self.parse_partial_member(self.parse_member_id(payload['id']), payload['data']),
            clear=_parse_clear(MemberField, payload),
            before=None,
            after=None,
        )

    def parse_server_member_join_event(
        self, shard: Shard, payload: raw.ClientServerMemberJoinEvent, /
    ) -> ServerMemberJoinEvent:
        return ServerMemberJoinEvent(
            shard=shard,
            server_id=ServerID(payload['id']),
            user_id=UserID(payload['user']),
            member=None,
        )

    def parse_server_member_leave_event(
        self, shard: Shard, payload: raw.ClientServerMemberLeaveEvent, /
    ) -> ServerMemberLeaveEvent:
        return ServerMemberLeaveEvent(
            shard=shard,
            server_id=ServerID(payload['id']),
            user_id=UserID(payload['user']),
            member=None,
        )

    def parse_server_role_update_event(
        self, shard: Shard, payload: raw.ClientServerRoleUpdateEvent, /
    ) -> ServerRoleUpdateEvent:
        """Parses a ServerRoleUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`ServerRoleUpdateEvent`
            The parsed server role update event object.
        """
        return ServerRoleUpdateEvent(
            shard=shard,
            data=self.parse_partial_role(ServerID(payload['id']), RoleID(payload['role_id']), payload['data']),
            clear=_parse_clear(RoleField, payload),
            before=None,
            after=None,
        )

    def parse_server_role_delete_event(
        self, shard: Shard, payload: raw.ClientServerRoleDeleteEvent, /
    ) -> ServerRoleDeleteEvent:
        return ServerRoleDeleteEvent(
            shard=shard,
            server_id=ServerID(payload['id']),
            role_id=RoleID(payload['role_id']),
            role=None,
        )

    def parse_user_update_event(self, shard: Shard, payload: raw.ClientUserUpdateEvent, /) -> UserUpdateEvent:
        """Parses a UserUpdate event.

        Parameters
        ----------
        shard: :class:`Shard`
            The shard the event arrived on.
        payload: Dict[:class:`str`, Any]
            The event payload to parse.

        Returns
        -------
        :class:`UserUpdateEvent`
            The parsed user update event object.
        """
        return UserUpdateEvent(
            shard=shard,
            data=self.parse_partial_user(UserID(payload['id']), payload['data']),
            clear=_parse_clear(UserField, payload),
            before=None,
            after=None,
        )

    def parse_user_relationship_event(
        self, shard: Shard, payload: raw.ClientUserRelationshipEvent, /
    ) -> UserRelationshipEvent:
        return UserRelationshipEvent(
            shard=shard,
            user_id=UserID(payload['id']),
            other_user_id=UserID(payload['user']),
            status=RelationshipStatus(payload['status']),
            before=None,
            after=None,
        )

    def parse_server_event(self, payload: typing.Any, /) -> ServerEvent:
        """Parses a message that is sent by client to server.

        This is mostly useful for testing and proxying.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The decoded JSON message.

        Raises
        ------
        ProtocolDecodeError
            The message has unknown ``type``, or does not have expected shape.

        Returns
        -------
        :class:`ServerEvent`
            The parsed message.
        """
        if not isinstance(payload, dict):
            raise ProtocolDecodeError(None, f'expected an object, got {type(payload).__name__}', payload)

        tag = payload.get('type')
        try:
            if tag == 'Authenticate':
                # Bot and session authentication share same type
                if 'token' in payload:
                    return AuthenticateBot(token=_expect(payload['token'], str, 'token'))
                return Authenticate(
                    user_id=UserID(payload['user_id']),
                    session_token=_expect(payload['session_token'], str, 'session_token'),
                )
            elif tag == 'BeginTyping':
                return BeginTyping(channel=ChannelID(payload['channel']))
            elif tag == 'EndTyping':
                return EndTyping(channel=ChannelID(payload['channel']))
            elif tag == 'Ping':
                time = _expect(payload['time'], int, 'time')
                data = payload.get('data')
                if data is None:
                    return Ping(time=time)
                return Ping(time=time, data=tuple(_expect(d, int, 'data') for d in data))  # type: ignore
        except _STRUCTURAL_ERRORS as exc:
            raise ProtocolDecodeError(tag, str(exc), payload) from exc
        raise ProtocolDecodeError(tag if isinstance(tag, str) else None, 'unknown message type', payload)

    # Assets

    def parse_asset_metadata(self, d: raw.Metadata, /) -> AssetMetadata:
        """Parses a asset metadata object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The asset metadata payload to parse.

        Returns
        -------
        :class:`AssetMetadata`
            The parsed asset metadata object.
        """
        return AssetMetadata(
            type=AssetMetadataType(d['type']),
            width=d.get('width'),
            height=d.get('height'),
        )

    def parse_asset(self, d: raw.File, /) -> Asset:
        """Parses a asset object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The asset payload to parse.

        Returns
        -------
        :class:`Asset`
            The parsed asset object.
        """
        return Asset(
            id=AttachmentID(d['_id']),
            tag=d['tag'],
            filename=d['filename'],
            metadata=self.parse_asset_metadata(d['metadata']),
            content_type=d['content_type'],
            size=_expect(d['size'], int, 'size'),
            deleted=d.get('deleted', False),
            reported=d.get('reported', False),
        )

    def parse_permission_override_field(self, payload: raw.OverrideField, /) -> PermissionOverride:
        """Parses a permission override field object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The permission override field payload to parse.

        Returns
        -------
        :class:`PermissionOverride`
            The parsed permission override object.
        """
        return PermissionOverride(
            allow=Permissions(_expect(payload['a'], int, 'a')),
            deny=Permissions(_expect(payload['d'], int, 'd')),
        )

    # Users

    def parse_user_status(self, payload: raw.UserStatus, /) -> UserStatus:
        presence = payload.get('presence')

        return UserStatus(
            text=payload.get('text'),
            presence=None if presence is None else Presence(presence),
        )

    def parse_user_profile(self, payload: raw.UserProfile, /) -> UserProfile:
        background = payload.get('background')

        return UserProfile(
            content=payload.get('content'),
            background=None if background is None else self.parse_asset(background),
        )

    def parse_relationship(self, payload: raw.Relationship, /) -> Relationship:
        return Relationship(
            id=UserID(payload['_id']),
            status=RelationshipStatus(payload['status']),
        )

    def parse_user(self, payload: raw.User, /) -> User:
        """Parses a user object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The user payload to parse.

        Returns
        -------
        :class:`User`
            The parsed user object.
        """
        avatar = payload.get('avatar')
        status = payload.get('status')
        profile = payload.get('profile')
        relationship = payload.get('relationship')
        bot = payload.get('bot')

        return User(
            state=self.state,
            id=UserID(payload['_id']),
            name=_expect(payload['username'], str, 'username'),
            avatar=None if avatar is None else self.parse_asset(avatar),
            relations=list(map(self.parse_relationship, payload.get('relations', ()))),
            badges=payload.get('badges', 0),
            status=None if status is None else self.parse_user_status(status),
            profile=None if profile is None else self.parse_user_profile(profile),
            relationship=None if relationship is None else RelationshipStatus(relationship),
            online=payload.get('online', False),
            flags=payload.get('flags', 0),
            bot=None if bot is None else BotUserInfo(owner_id=UserID(bot['owner'])),
        )

    def parse_partial_user(self, user_id: UserID, data: raw.PartialUser, /) -> PartialUser:
        avatar = data.get('avatar')
        status = data.get('status')
        profile = data.get('profile')

        return PartialUser(
            state=self.state,
            id=user_id,
            name=data.get('username', UNDEFINED),
            avatar=UNDEFINED if avatar is None else self.parse_asset(avatar),
            badges=data.get('badges', UNDEFINED),
            status=UNDEFINED if status is None else self.parse_user_status(status),
            profile=UNDEFINED if profile is None else self.parse_user_profile(profile),
            online=data.get('online', UNDEFINED),
            flags=data.get('flags', UNDEFINED),
        )

    # Channels

    def parse_channel(self, payload: raw.Channel, /) -> Channel:
        """Parses a channel object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The channel payload to parse.

        Returns
        -------
        :class:`Channel`
            The parsed channel object.
        """
        return self._channel_parsers[payload['channel_type']](payload)

    def parse_saved_messages_channel(self, payload: raw.SavedMessagesChannel, /) -> SavedMessagesChannel:
        return SavedMessagesChannel(
            state=self.state,
            id=ChannelID(payload['_id']),
            user_id=UserID(payload['user']),
        )

    def parse_direct_message_channel(self, payload: raw.DirectMessageChannel, /) -> DMChannel:
        last_message_id = payload.get('last_message_id')

        return DMChannel(
            state=self.state,
            id=ChannelID(payload['_id']),
            active=_expect(payload['active'], bool, 'active'),
            recipient_ids=list(map(UserID, payload['recipients'])),
            last_message_id=None if last_message_id is None else MessageID(last_message_id),
        )

    def parse_group_channel(self, payload: raw.GroupChannel, /) -> GroupChannel:
        """Parses a group channel object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The group channel payload to parse.

        Returns
        -------
        :class:`GroupChannel`
            The parsed group channel object.
        """
        icon = payload.get('icon')
        last_message_id = payload.get('last_message_id')

        return GroupChannel(
            state=self.state,
            id=ChannelID(payload['_id']),
            name=_expect(payload['name'], str, 'name'),
            owner_id=UserID(payload['owner']),
            description=payload.get('description'),
            recipient_ids=list(map(UserID, payload['recipients'])),
            icon=None if icon is None else self.parse_asset(icon),
            last_message_id=None if last_message_id is None else MessageID(last_message_id),
            permissions=payload.get('permissions'),
            nsfw=payload.get('nsfw', False),
        )

    def _parse_server_channel_fields(self, payload: raw.ServerChannel, /) -> dict[str, typing.Any]:
        icon = payload.get('icon')
        default_permissions = payload.get('default_permissions')
        role_permissions = payload.get('role_permissions') or {}

        return {
            'state': self.state,
            'id': ChannelID(payload['_id']),
            'server_id': ServerID(payload['server']),
            'name': _expect(payload['name'], str, 'name'),
            'description': payload.get('description'),
            'icon': None if icon is None else self.parse_asset(icon),
            'default_permissions': (
                None if default_permissions is None else self.parse_permission_override_field(default_permissions)
            ),
            'role_permissions': {
                RoleID(k): self.parse_permission_override_field(v) for k, v in role_permissions.items()
            },
            'nsfw': payload.get('nsfw', False),
        }

    def parse_text_channel(self, payload: raw.TextChannel, /) -> TextChannel:
        """Parses a text channel object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The text channel payload to parse.

        Returns
        -------
        :class:`TextChannel`
            The parsed text channel object.
        """
        last_message_id = payload.get('last_message_id')

        return TextChannel(
            **self._parse_server_channel_fields(payload),
            last_message_id=None if last_message_id is None else MessageID(last_message_id),
        )

    def parse_voice_channel(self, payload: raw.VoiceChannel, /) -> VoiceChannel:
        return VoiceChannel(**self._parse_server_channel_fields(payload))

    def parse_partial_channel(self, channel_id: ChannelID, data: raw.PartialChannel, /) -> PartialChannel:
        """Parses a partial channel object.

        Parameters
        ----------
        channel_id: :class:`.ChannelID`
            The channel's ID.
        data: Dict[:class:`str`, Any]
            The partial channel payload to parse.

        Returns
        -------
        :class:`PartialChannel`
            The parsed partial channel object.
        """
        owner = data.get('owner')
        icon = data.get('icon')
        role_permissions = data.get('role_permissions')
        default_permissions = data.get('default_permissions')
        last_message_id = data.get('last_message_id')

        return PartialChannel(
            state=self.state,
            id=channel_id,
            name=data.get('name', UNDEFINED),
            owner_id=UNDEFINED if owner is None else UserID(owner),
            description=data.get('description', UNDEFINED),
            icon=UNDEFINED if icon is None else self.parse_asset(icon),
            nsfw=data.get('nsfw', UNDEFINED),
            active=data.get('active', UNDEFINED),
            permissions=data.get('permissions', UNDEFINED),
            role_permissions=(
                UNDEFINED
                if role_permissions is None
                else {RoleID(k): self.parse_permission_override_field(v) for k, v in role_permissions.items()}
            ),
            default_permissions=(
                UNDEFINED if default_permissions is None else self.parse_permission_override_field(default_permissions)
            ),
            last_message_id=UNDEFINED if last_message_id is None else MessageID(last_message_id),
        )

    # Servers

    def parse_category(self, payload: raw.Category, /) -> Category:
        return Category(
            id=payload['id'],
            title=payload['title'],
            channels=list(map(ChannelID, payload['channels'])),
        )

    def parse_system_message_channels(self, payload: raw.SystemMessageChannels, /) -> SystemMessageChannels:
        """Parses a system message channels object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The system message channels payload to parse.

        Returns
        -------
        :class:`SystemMessageChannels`
            The parsed system message channels object.
        """
        user_joined = payload.get('user_joined')
        user_left = payload.get('user_left')
        user_kicked = payload.get('user_kicked')
        user_banned = payload.get('user_banned')

        return SystemMessageChannels(
            user_joined=None if user_joined is None else ChannelID(user_joined),
            user_left=None if user_left is None else ChannelID(user_left),
            user_kicked=None if user_kicked is None else ChannelID(user_kicked),
            user_banned=None if user_banned is None else ChannelID(user_banned),
        )

    def parse_role(self, payload: raw.Role, role_id: RoleID, server_id: ServerID, /) -> Role:
        """Parses a role object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The role payload to parse.
        role_id: :class:`.RoleID`
            The role's ID.
        server_id: :class:`.ServerID`
            The server's ID the role belongs to.

        Returns
        -------
        :class:`Role`
            The parsed role object.
        """
        return Role(
            state=self.state,
            id=role_id,
            server_id=server_id,
            name=_expect(payload['name'], str, 'name'),
            permissions=self.parse_permission_override_field(payload['permissions']),
            colour=payload.get('colour'),
            hoist=payload.get('hoist', False),
            rank=payload.get('rank', 0),
        )

    def parse_partial_role(self, server_id: ServerID, role_id: RoleID, data: raw.PartialRole, /) -> PartialRole:
        permissions = data.get('permissions')

        return PartialRole(
            state=self.state,
            id=role_id,
            server_id=server_id,
            name=data.get('name', UNDEFINED),
            permissions=UNDEFINED if permissions is None else self.parse_permission_override_field(permissions),
            colour=data.get('colour', UNDEFINED),
            hoist=data.get('hoist', UNDEFINED),
            rank=data.get('rank', UNDEFINED),
        )

    def parse_server(self, payload: raw.Server, /) -> Server:
        """Parses a server object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The server payload to parse.

        Returns
        -------
        :class:`Server`
            The parsed server object.
        """
        server_id = ServerID(payload['_id'])
        system_messages = payload.get('system_messages')
        icon = payload.get('icon')
        banner = payload.get('banner')

        roles = {}
        for k, v in payload.get('roles', {}).items():
            role_id = RoleID(k)
            roles[role_id] = self.parse_role(v, role_id, server_id)

        return Server(
            state=self.state,
            id=server_id,
            owner_id=UserID(payload['owner']),
            name=_expect(payload['name'], str, 'name'),
            description=payload.get('description'),
            channel_ids=list(map(ChannelID, payload['channels'])),
            categories=list(map(self.parse_category, payload.get('categories', ()))),
            system_messages=None if system_messages is None else self.parse_system_message_channels(system_messages),
            roles=roles,
            default_permissions=_expect(payload['default_permissions'], int, 'default_permissions'),
            icon=None if icon is None else self.parse_asset(icon),
            banner=None if banner is None else self.parse_asset(banner),
            nsfw=payload.get('nsfw', False),
            flags=payload.get('flags', 0),
        )

    def parse_partial_server(self, server_id: ServerID, data: raw.PartialServer, /) -> PartialServer:
        """Parses a partial server object.

        Parameters
        ----------
        server_id: :class:`.ServerID`
            The server's ID.
        data: Dict[:class:`str`, Any]
            The partial server payload to parse.

        Returns
        -------
        :class:`PartialServer`
            The parsed partial server object.
        """
        owner = data.get('owner')
        channels = data.get('channels')
        categories = data.get('categories')
        system_messages = data.get('system_messages')
        icon = data.get('icon')
        banner = data.get('banner')

        return PartialServer(
            state=self.state,
            id=server_id,
            owner_id=UNDEFINED if owner is None else UserID(owner),
            name=data.get('name', UNDEFINED),
            description=data.get('description', UNDEFINED),
            channel_ids=UNDEFINED if channels is None else list(map(ChannelID, channels)),
            categories=UNDEFINED if categories is None else list(map(self.parse_category, categories)),
            system_messages=(
                UNDEFINED if system_messages is None else self.parse_system_message_channels(system_messages)
            ),
            default_permissions=data.get('default_permissions', UNDEFINED),
            icon=UNDEFINED if icon is None else self.parse_asset(icon),
            banner=UNDEFINED if banner is None else self.parse_asset(banner),
            flags=data.get('flags', UNDEFINED),
            nsfw=data.get('nsfw', UNDEFINED),
        )

    # Members

    def parse_member_id(self, payload: raw.MemberCompositeKey, /) -> MemberID:
        return MemberID(server=ServerID(payload['server']), user=UserID(payload['user']))

    def parse_member(self, payload: raw.Member, /) -> Member:
        """Parses a member object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The member payload to parse.

        Returns
        -------
        :class:`Member`
            The parsed member object.
        """
        joined_at = payload.get('joined_at')
        avatar = payload.get('avatar')

        return Member(
            state=self.state,
            id=self.parse_member_id(payload['_id']),
            joined_at=None if joined_at is None else _parse_dt(joined_at),
            nickname=payload.get('nickname'),
            avatar=None if avatar is None else self.parse_asset(avatar),
            roles=list(map(RoleID, payload.get('roles', ()))),
        )

    def parse_partial_member(self, member_id: MemberID, data: raw.PartialMember, /) -> PartialMember:
        avatar = data.get('avatar')
        roles = data.get('roles')

        return PartialMember(
            state=self.state,
            id=member_id,
            nickname=data.get('nickname', UNDEFINED),
            avatar=UNDEFINED if avatar is None else self.parse_asset(avatar),
            roles=UNDEFINED if roles is None else list(map(RoleID, roles)),
        )

    # Messages

    def parse_system_message(self, payload: raw.SystemMessage, /) -> SystemMessage:
        data = dict(payload)
        return SystemMessage(type=_expect(data.pop('type'), str, 'type'), data=data)

    def parse_message(self, payload: raw.Message, /) -> Message:
        """Parses a message object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The message payload to parse.

        Returns
        -------
        :class:`Message`
            The parsed message object.
        """
        content = payload.get('content', '')
        system = payload.get('system')
        edited_at = payload.get('edited')

        # Older servers send system messages in place of content
        if isinstance(content, dict):
            system = content
            content = ''

        return Message(
            state=self.state,
            id=MessageID(payload['_id']),
            channel_id=ChannelID(payload['channel']),
            author_id=UserID(payload['author']),
            nonce=payload.get('nonce'),
            content=_expect(content, str, 'content'),
            system=None if system is None else self.parse_system_message(system),
            attachments=list(map(self.parse_asset, payload.get('attachments', ()))),
            edited_at=None if edited_at is None else _parse_dt(edited_at),
            embeds=list(payload.get('embeds', ())),
            mentions=list(map(UserID, payload.get('mentions', ()))),
            replies=list(map(MessageID, payload.get('replies', ()))),
        )


__all__ = ('Parser',)
