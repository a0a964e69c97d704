"""Point-scoped evaluation context for expressions.

A ``PointContext`` resolves the pseudo identifiers ``x``, ``y``, ``z``,
``rawx``, ``rawy``, ``rawz`` and ``meta`` against exactly one point. Plot
handlers create one per surveyed record and hand it to the point meta
handler explicitly, so evaluating one point never observes another.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from .coord import X, Y, Z, Coord
from .numbers import parse_number


def _validated(direction: int) -> Callable[[Coord], Any]:
    return lambda pt: pt.x[direction]


def _raw(direction: int) -> Callable[[Coord], Any]:
    def resolve(pt: Coord) -> Any:
        source = pt.unfiltered if pt.unfiltered is not None else pt
        return parse_number(source.x[direction])

    return resolve


_RESOLVERS: Dict[str, Callable[[Coord], Any]] = {
    "x": _validated(X),
    "y": _validated(Y),
    "z": _validated(Z),
    "rawx": _raw(X),
    "rawy": _raw(Y),
    "rawz": _raw(Z),
    "meta": lambda pt: pt.meta,
}


class PointContext(Mapping[str, Any]):
    def __init__(self, point: Optional[Coord] = None):
        self.point = point

    def bind(self, point: Coord) -> "PointContext":
        self.point = point
        return self

    @staticmethod
    def names() -> Tuple[str, ...]:
        return tuple(_RESOLVERS)

    def __getitem__(self, name: str) -> Any:
        resolver = _RESOLVERS.get(name)
        if resolver is None:
            raise KeyError(name)
        if self.point is None:
            raise KeyError(f"'{name}' is not available outside of a surveyed point")
        return resolver(self.point)

    def __getattr__(self, name: str) -> Any:
        if name in _RESOLVERS:
            try:
                return self[name]
            except KeyError as exc:
                raise AttributeError(str(exc)) from exc
        raise AttributeError(name)

    def __contains__(self, name: object) -> bool:
        return name in _RESOLVERS

    def __iter__(self) -> Iterator[str]:
        return iter(_RESOLVERS)

    def __len__(self) -> int:
        return len(_RESOLVERS)

    def __repr__(self) -> str:
        return f"PointContext(point={self.point})"
