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
from enum import IntFlag
import typing

if typing.TYPE_CHECKING:
    from . import raw


class Permissions(IntFlag):
    NONE = 0

    # * Generic permissions

    MANAGE_CHANNEL = 1 << 0
    """Manage the channel or channels on the server."""

    MANAGE_SERVER = 1 << 1
    """Manage the server."""

    MANAGE_PERMISSIONS = 1 << 2
    """Manage permissions on servers or channels."""

    MANAGE_ROLE = 1 << 3
    """Manage roles on server."""

    MANAGE_CUSTOMISATION = 1 << 4
    """Manage server customisation (includes emoji)."""

    # * Member permissions

    KICK_MEMBERS = 1 << 6
    BAN_MEMBERS = 1 << 7
    TIMEOUT_MEMBERS = 1 << 8
    ASSIGN_ROLES = 1 << 9
    CHANGE_NICKNAME = 1 << 10
    MANAGE_NICKNAMES = 1 << 11
    CHANGE_AVATAR = 1 << 12
    REMOVE_AVATARS = 1 << 13

    # * Channel permissions

    VIEW_CHANNEL = 1 << 20
    READ_MESSAGE_HISTORY = 1 << 21
    SEND_MESSAGE = 1 << 22
    MANAGE_MESSAGES = 1 << 23
    MANAGE_WEBHOOKS = 1 << 24
    INVITE_OTHERS = 1 << 25
    SEND_EMBEDS = 1 << 26
    UPLOAD_FILES = 1 << 27
    MASQUERADE = 1 << 28
    REACT = 1 << 29

    # * Voice permissions

    CONNECT = 1 << 30
    SPEAK = 1 << 31
    VIDEO = 1 << 32
    MUTE_MEMBERS = 1 << 33
    DEAFEN_MEMBERS = 1 << 34
    MOVE_MEMBERS = 1 << 35


@define(slots=True, frozen=True)
class PermissionOverride:
    """Represents a single permission override."""

    allow: Permissions = field(repr=True, kw_only=True, default=Permissions.NONE)
    """:class:`.Permissions`: Allow bit flags."""

    deny: Permissions = field(repr=True, kw_only=True, default=Permissions.NONE)
    """:class:`.Permissions`: Disallow bit flags."""

    def build(self) -> raw.OverrideField:
        return {'a': int(self.allow), 'd': int(self.deny)}


__all__ = ('Permissions', 'PermissionOverride')
