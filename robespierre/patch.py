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

from .errors import OrphanPatchError

if typing.TYPE_CHECKING:
    from collections.abc import Iterable

E = typing.TypeVar('E')


def apply_patch(existing: typing.Optional[E], data: typing.Any, clear: Iterable[typing.Any] = (), /) -> E:
    """Applies partial data and field clears to an entity snapshot.

    The snapshot is never modified: a shallow copy receives the update,
    and nested values are always replaced on it rather than mutated.
    Fields listed in ``clear`` are reset after the patch is applied, so
    clearing wins when a field is both set and cleared.

    Parameters
    ----------
    existing: Optional[Any]
        The current entity snapshot, usually retrieved from cache.
    data: Any
        The partial entity (:class:`.PartialUser`, :class:`.PartialChannel`, etc).
    clear: Iterable[:class:`.Enum`]
        The field tags to reset to their empty values.

    Raises
    ------
    OrphanPatchError
        No snapshot was provided.

    Returns
    -------
    Any
        The updated entity.
    """
    if existing is None:
        raise OrphanPatchError(getattr(data, 'kind', type(data).__name__), data.id)

    result = copy(existing)
    result.locally_update(data)  # type: ignore
    for tag in clear:
        result.locally_clear(tag)  # type: ignore
    return result


__all__ = ('apply_patch',)
