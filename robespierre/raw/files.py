from __future__ import annotations

import typing
import typing_extensions

# Autumn buckets an asset can live in
FileTag = typing.Literal['attachments', 'avatars', 'backgrounds', 'icons', 'banners', 'emojis']


class ImageMetadata(typing.TypedDict):
    type: typing.Literal['Image']
    width: int
    height: int


class VideoMetadata(typing.TypedDict):
    type: typing.Literal['Video']
    width: int
    height: int


class PlainMetadata(typing.TypedDict):
    type: typing.Literal['File', 'Text', 'Audio']


Metadata = typing.Union[ImageMetadata, VideoMetadata, PlainMetadata]


class File(typing.TypedDict):
    _id: str
    tag: FileTag
    filename: str
    metadata: Metadata
    content_type: str
    size: int
    deleted: typing_extensions.NotRequired[bool]
    reported: typing_extensions.NotRequired[bool]
