"""Wire format shared with the host: coordinate groups and summary pairs."""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Optional

from .coord import Coord
from .numbers import to_tex_string

NumberFormatter = Callable[[Any], str]


def serialize_coord(pt: Coord, to_number: NumberFormatter = to_tex_string) -> str:
    """Return ``<x>,<y>,<z>`` of ``pt``."""

    return ",".join(to_number(value) for value in pt.x)


def coord_group(private: str, pt: Coord, to_number: NumberFormatter = to_tex_string) -> str:
    return "{" + private + ";" + serialize_coord(pt, to_number) + "}"


def coords_to_tex(
    coords: Iterable[Coord],
    private: Callable[[Coord], str],
    to_number: NumberFormatter = to_tex_string,
) -> str:
    return "".join(coord_group(private(pt), pt, to_number) for pt in coords)


def key_value(name: str, value: str) -> str:
    return f"{name}={value},"


def axis_limit(name: str, value: Optional[float]) -> str:
    """``name=value,`` or the empty string while the limit is still unset."""

    if value is None or math.isinf(value):
        return ""
    return key_value(name, to_tex_string(value))


def bool_flag(value: bool) -> str:
    return "1" if value else "0"


__all__ = [
    "NumberFormatter",
    "axis_limit",
    "bool_flag",
    "coord_group",
    "coords_to_tex",
    "key_value",
    "serialize_coord",
]
