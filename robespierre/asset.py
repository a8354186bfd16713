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

from .core import AttachmentID
from .enums import AssetMetadataType


@define(slots=True, frozen=True)
class AssetMetadata:
    """Metadata associated with a file."""

    type: AssetMetadataType = field(repr=True, kw_only=True)
    """:class:`.AssetMetadataType`: The metadata type."""

    width: typing.Optional[int] = field(repr=True, kw_only=True)
    """Optional[:class:`int`]: The width of image or video."""

    height: typing.Optional[int] = field(repr=True, kw_only=True)
    """Optional[:class:`int`]: The height of image or video."""


@define(slots=True, frozen=True)
class Asset:
    """Represents a file on Revolt's file server (Autumn).

    Assets are immutable: updates always replace the whole asset.
    """

    id: AttachmentID = field(repr=True, kw_only=True)
    """:class:`.AttachmentID`: The asset ID."""

    tag: str = field(repr=True, kw_only=True)
    """:class:`str`: The tag (bucket) the asset was uploaded to, e.g. ``'avatars'``."""

    filename: str = field(repr=True, kw_only=True)
    """:class:`str`: The original filename."""

    metadata: AssetMetadata = field(repr=True, kw_only=True)
    """:class:`.AssetMetadata`: Parsed metadata of this file."""

    content_type: str = field(repr=True, kw_only=True)
    """:class:`str`: The content type of this file."""

    size: int = field(repr=True, kw_only=True)
    """:class:`int`: The size of this file (in bytes)."""

    deleted: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this file was deleted."""

    reported: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this file was reported."""

    def url(self, base: str = 'https://autumn.revolt.chat', /) -> str:
        """:class:`str`: The URL to the asset."""
        return f'{base.rstrip("/")}/{self.tag}/{self.id}'


__all__ = ('AssetMetadata', 'Asset')
