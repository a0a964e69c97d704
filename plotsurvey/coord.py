from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from .numbers import string_or_placeholder

X, Y, Z = 0, 1, 2
DIRECTION_NAMES = ("x", "y", "z")


@dataclass
class RawRecord:
    """One coordinate record as delivered by the host (text or numbers)."""

    x: Any = None
    y: Any = None
    z: Any = None
    meta: Any = None


Record = Union[RawRecord, Sequence[Any], Mapping[str, Any], np.ndarray]


def _empty_triple() -> List[Any]:
    return [None, None, None]


@dataclass
class Coord:
    x: List[Any] = field(default_factory=_empty_triple)
    meta: Any = None
    metatransformed: Optional[float] = None  # assigned during the visualization phase only
    unfiltered: Optional["Coord"] = None
    unbounded_dir: Optional[int] = None
    untransformed: Optional[List[Any]] = None

    @classmethod
    def from_record(cls, record: Record) -> "Coord":
        if isinstance(record, Coord):
            raw = cls(x=list(record.x), meta=record.meta)
        elif isinstance(record, RawRecord):
            raw = cls(x=[record.x, record.y, record.z], meta=record.meta)
        elif isinstance(record, Mapping):
            raw = cls(
                x=[record.get("x"), record.get("y"), record.get("z")],
                meta=record.get("meta"),
            )
        elif isinstance(record, np.ndarray):
            if record.ndim != 1:
                raise ValueError(f"a coordinate record must be one array row, got shape {record.shape}")
            return cls.from_record(record.tolist())
        elif isinstance(record, Sequence) and not isinstance(record, (str, bytes)):
            if len(record) > 3:
                raise ValueError(f"a coordinate record has at most 3 fields, got {len(record)}")
            values = list(record) + [None] * (3 - len(record))
            raw = cls(x=values)
        else:
            raise TypeError(f"unsupported coordinate record {record!r}")
        return raw

    @property
    def is_valid(self) -> bool:
        return self.x[X] is not None

    def copy(self, other: "Coord") -> None:
        """Copy coordinates and meta of ``other`` into ``self`` (not ``unfiltered``)."""

        self.x = list(other.x)
        self.meta = other.meta
        self.metatransformed = other.metatransformed
        self.unfiltered = None

    def clone(self) -> "Coord":
        result = Coord()
        result.copy(self)
        return result

    def __str__(self) -> str:
        coords = ",".join(string_or_placeholder(value) for value in self.x)
        result = f"({coords}) [{string_or_placeholder(self.meta)}]"
        if not self.is_valid and self.unfiltered is not None:
            result += f"(was {self.unfiltered})"
        return result
