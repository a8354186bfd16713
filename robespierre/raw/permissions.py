from __future__ import annotations

import typing


class OverrideField(typing.TypedDict):
    a: int
    d: int
