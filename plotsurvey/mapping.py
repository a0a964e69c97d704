"""Affine maps used by the visualization phase."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .errors import InvalidDomainError, MissingArgumentError
from .numbers import is_finite

logger = logging.getLogger(__name__)

POINT_META_RANGE = (0.0, 1000.0)


class LinearMap:
    """Maps ``[in_min, in_max]`` linearly onto ``[out_min, out_max]``."""

    def __init__(self, in_min: float, in_max: float, out_min: float, out_max: float):
        if in_min is None or in_max is None or out_min is None or out_max is None:
            raise MissingArgumentError()
        if in_min >= in_max:
            raise InvalidDomainError(in_min, in_max)
        self.scale = (out_max - out_min) / (in_max - in_min)
        self.offset = out_min - self.scale * in_min

    def map(self, x: float) -> float:
        return x * self.scale + self.offset

    def __repr__(self) -> str:
        return f"LinearMap(scale={self.scale!r}, offset={self.offset!r})"


class PointMetaMap:
    """Normalizes point meta values into ``POINT_META_RANGE``.

    Finite values outside of the input domain are clamped. Unbounded values
    map to the lower end of the range; the first of them is reported once,
    after which ``warn_for_filter_discards`` stays ``False`` for this map.
    """

    def __init__(self, in_min: float, in_max: float, warn_for_filter_discards: Optional[bool] = True):
        if in_min is None or in_max is None or warn_for_filter_discards is None:
            raise MissingArgumentError()
        out_min, out_max = POINT_META_RANGE
        self._mapper = LinearMap(in_min, in_max, out_min, out_max)
        self.in_min = in_min
        self.in_max = in_max
        self.warn_for_filter_discards = bool(warn_for_filter_discards)

    def map(self, meta: Any) -> float:
        out_min, out_max = POINT_META_RANGE
        if is_finite(meta):
            result = self._mapper.map(meta)
            return min(out_max, max(out_min, result))
        if self.warn_for_filter_discards:
            logger.warning(
                "The per point meta data '%s' (and probably others as well) is unbounded"
                " - using the minimum value instead.",
                meta,
            )
            self.warn_for_filter_discards = False
        return out_min


class DatascaleTrafo:
    """``x -> 10**exponent * x - shift``, one instance per axis direction."""

    def __init__(self, exponent: float, shift: float):
        if exponent is None or shift is None:
            raise MissingArgumentError()
        self.exponent = exponent
        self.shift = shift
        self.scale = 10.0 ** exponent

    def map(self, x: float) -> float:
        return self.scale * x - self.shift

    def __repr__(self) -> str:
        return f"DatascaleTrafo(exponent={self.exponent!r}, shift={self.shift!r})"


__all__ = ["DatascaleTrafo", "LinearMap", "POINT_META_RANGE", "PointMetaMap"]
