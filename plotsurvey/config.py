"""Plot handler configuration and the process-wide defaults."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class UnboundedCoords(Enum):
    """What happens to a coordinate which is unbounded or filtered away."""

    DISCARD = "discard"
    JUMP = "jump"


class PointMetaRel(Enum):
    """Domain of the point meta normalization of a plot."""

    AXISWIDE = "axis wide"
    PERPLOT = "per plot"


@dataclass
class PlothandlerConfig:
    unbounded_coords: UnboundedCoords = UnboundedCoords.DISCARD
    warn_for_filter_discards: bool = True
    pointmetarel: PointMetaRel = PointMetaRel.AXISWIDE

    def __post_init__(self) -> None:
        self.unbounded_coords = _coerce_enum(UnboundedCoords, self.unbounded_coords)
        self.pointmetarel = _coerce_enum(PointMetaRel, self.pointmetarel)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unbounded_coords": self.unbounded_coords.value,
            "warn_for_filter_discards": self.warn_for_filter_discards,
            "pointmetarel": self.pointmetarel.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlothandlerConfig":
        unknown = set(data) - {"unbounded_coords", "warn_for_filter_discards", "pointmetarel"}
        if unknown:
            raise ValueError(f"unknown plot handler option(s): {', '.join(sorted(unknown))}")
        return cls(
            unbounded_coords=data.get("unbounded_coords", UnboundedCoords.DISCARD),
            warn_for_filter_discards=bool(data.get("warn_for_filter_discards", True)),
            pointmetarel=data.get("pointmetarel", PointMetaRel.AXISWIDE),
        )


def _coerce_enum(enum_cls: type, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower().replace("_", " ").replace("-", " ")
        for member in enum_cls:
            if key in (member.value, member.name.lower()):
                return member
    raise ValueError(f"invalid {enum_cls.__name__} value {value!r}")


_DEFAULT_PLOTHANDLER_CONFIG = PlothandlerConfig()


def get_default_plothandler_config() -> PlothandlerConfig:
    return copy.deepcopy(_DEFAULT_PLOTHANDLER_CONFIG)


def set_default_plothandler_config(config: PlothandlerConfig) -> None:
    global _DEFAULT_PLOTHANDLER_CONFIG
    _DEFAULT_PLOTHANDLER_CONFIG = copy.deepcopy(config)


__all__ = [
    "PlothandlerConfig",
    "PointMetaRel",
    "UnboundedCoords",
    "get_default_plothandler_config",
    "set_default_plothandler_config",
]
