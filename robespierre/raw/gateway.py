from __future__ import annotations

import typing
import typing_extensions

from .channels import (
    SavedMessagesChannel,
    DirectMessageChannel,
    GroupChannel,
    TextChannel,
    VoiceChannel,
    Channel,
    PartialChannel,
    FieldsChannel,
)
from .messages import Message, PartialMessage
from .server_members import Member, PartialMember, MemberCompositeKey, FieldsMember
from .servers import Server, PartialServer, PartialRole, FieldsServer, FieldsRole
from .users import User, PartialUser, FieldsUser, RelationshipStatus


class ClientErrorEvent(typing.TypedDict):
    type: typing.Literal['Error']
    message: typing_extensions.NotRequired[str]
    # Older servers
    error: typing_extensions.NotRequired[str]


class ClientAuthenticatedEvent(typing.TypedDict):
    type: typing.Literal['Authenticated']


class ClientPongEvent(typing.TypedDict):
    type: typing.Literal['Pong']
    time: int


class ClientReadyEvent(typing.TypedDict):
    type: typing.Literal['Ready']
    users: list[User]
    servers: list[Server]
    channels: list[Channel]
    members: list[Member]


class ClientMessageEvent(Message):
    type: typing.Literal['Message']


class ClientMessageUpdateEvent(typing.TypedDict):
    type: typing.Literal['MessageUpdate']
    id: str
    channel: str
    data: PartialMessage


class ClientMessageDeleteEvent(typing.TypedDict):
    type: typing.Literal['MessageDelete']
    id: str
    channel: str


class ClientSavedMessagesChannelCreateEvent(SavedMessagesChannel):
    type: typing.Literal['ChannelCreate']


class ClientDirectMessageChannelCreateEvent(DirectMessageChannel):
    type: typing.Literal['ChannelCreate']


class ClientGroupChannelCreateEvent(GroupChannel):
    type: typing.Literal['ChannelCreate']


class ClientTextChannelCreateEvent(TextChannel):
    type: typing.Literal['ChannelCreate']


class ClientVoiceChannelCreateEvent(VoiceChannel):
    type: typing.Literal['ChannelCreate']


ClientChannelCreateEvent = (
    ClientSavedMessagesChannelCreateEvent
    | ClientDirectMessageChannelCreateEvent
    | ClientGroupChannelCreateEvent
    | ClientTextChannelCreateEvent
    | ClientVoiceChannelCreateEvent
)


class ClientChannelUpdateEvent(typing.TypedDict):
    type: typing.Literal['ChannelUpdate']
    id: str
    data: PartialChannel
    clear: typing_extensions.NotRequired[list[FieldsChannel] | FieldsChannel]


class ClientChannelDeleteEvent(typing.TypedDict):
    type: typing.Literal['ChannelDelete']
    id: str


class ClientChannelGroupJoinEvent(typing.TypedDict):
    type: typing.Literal['ChannelGroupJoin']
    id: str
    user: str


class ClientChannelGroupLeaveEvent(typing.TypedDict):
    type: typing.Literal['ChannelGroupLeave']
    id: str
    user: str


class ClientChannelStartTypingEvent(typing.TypedDict):
    type: typing.Literal['ChannelStartTyping']
    id: str
    user: str


class ClientChannelStopTypingEvent(typing.TypedDict):
    type: typing.Literal['ChannelStopTyping']
    id: str
    user: str


class ClientChannelAckEvent(typing.TypedDict):
    type: typing.Literal['ChannelAck']
    id: str
    user: str
    message_id: str


class ClientServerUpdateEvent(typing.TypedDict):
    type: typing.Literal['ServerUpdate']
    id: str
    data: PartialServer
    clear: typing_extensions.NotRequired[list[FieldsServer] | FieldsServer]


class ClientServerDeleteEvent(typing.TypedDict):
    type: typing.Literal['ServerDelete']
    id: str


class ClientServerMemberUpdateEvent(typing.TypedDict):
    type: typing.Literal['ServerMemberUpdate']
    id: MemberCompositeKey
    data: PartialMember
    clear: typing_extensions.NotRequired[list[FieldsMember] | FieldsMember]


class ClientServerMemberJoinEvent(typing.TypedDict):
    type: typing.Literal['ServerMemberJoin']
    id: str
    user: str


class ClientServerMemberLeaveEvent(typing.TypedDict):
    type: typing.Literal['ServerMemberLeave']
    id: str
    user: str


class ClientServerRoleUpdateEvent(typing.TypedDict):
    type: typing.Literal['ServerRoleUpdate']
    id: str
    role_id: str
    data: PartialRole
    clear: typing_extensions.NotRequired[list[FieldsRole] | FieldsRole]


class ClientServerRoleDeleteEvent(typing.TypedDict):
    type: typing.Literal['ServerRoleDelete']
    id: str
    role_id: str


class ClientUserUpdateEvent(typing.TypedDict):
    type: typing.Literal['UserUpdate']
    id: str
    data: PartialUser
    clear: typing_extensions.NotRequired[list[FieldsUser] | FieldsUser]


class ClientUserRelationshipEvent(typing.TypedDict):
    type: typing.Literal['UserRelationship']
    id: str
    user: str
    status: RelationshipStatus


ClientEvent = (
    ClientErrorEvent
    | ClientAuthenticatedEvent
    | ClientPongEvent
    | ClientReadyEvent
    | ClientMessageEvent
    | ClientMessageUpdateEvent
    | ClientMessageDeleteEvent
    | ClientChannelCreateEvent
    | ClientChannelUpdateEvent
    | ClientChannelDeleteEvent
    | ClientChannelGroupJoinEvent
    | ClientChannelGroupLeaveEvent
    | ClientChannelStartTypingEvent
    | ClientChannelStopTypingEvent
    | ClientChannelAckEvent
    | ClientServerUpdateEvent
    | ClientServerDeleteEvent
    | ClientServerMemberUpdateEvent
    | ClientServerMemberJoinEvent
    | ClientServerMemberLeaveEvent
    | ClientServerRoleUpdateEvent
    | ClientServerRoleDeleteEvent
    | ClientUserUpdateEvent
    | ClientUserRelationshipEvent
)


class ServerAuthenticateEvent(typing.TypedDict):
    type: typing.Literal['Authenticate']
    user_id: str
    session_token: str


class ServerAuthenticateBotEvent(typing.TypedDict):
    type: typing.Literal['Authenticate']
    token: str


class ServerBeginTypingEvent(typing.TypedDict):
    type: typing.Literal['BeginTyping']
    channel: str


class ServerEndTypingEvent(typing.TypedDict):
    type: typing.Literal['EndTyping']
    channel: str


class ServerPingEvent(typing.TypedDict):
    type: typing.Literal['Ping']
    time: int
    data: list[int]


ServerEvent = (
    ServerAuthenticateEvent | ServerAuthenticateBotEvent | ServerBeginTypingEvent | ServerEndTypingEvent | ServerPingEvent
)
