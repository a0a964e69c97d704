"""Per plot survey engine.

A plot handler consumes the coordinate records of one plot, one at a time,
and collects the surveyed coordinates together with the point meta range of
the plot. Parsing, validation, limit tracking and the accept/drop/jump policy
are delegated to the ``Axis`` the handler is attached to.

Lifecycle::

    CONSTRUCTED --survey_start--> SURVEY --survey_end--> SURVEY_DONE
        --visualization_phase_init--> VISUALIZATION

Specializations customize the survey by overriding
``survey_before_set_point_meta``, ``survey_after_set_point_meta`` and
``survey_end``.
"""

from __future__ import annotations

import copy
import logging
import math
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional

import numpy as np

from .config import PlothandlerConfig, PointMetaRel, get_default_plothandler_config
from .context import PointContext
from .coord import Coord, Record
from .errors import MissingArgumentError, PhaseError, PlotSurveyError, UnparsedMetaError
from .mapping import PointMetaMap
from .numbers import is_number, to_tex_string
from .pointmeta import PointMetaHandler
from .printer import NumberFormatter, coords_to_tex, serialize_coord

if TYPE_CHECKING:  # pragma: no cover
    from .axis import Axis

logger = logging.getLogger(__name__)

NEUTRAL_META = 1


class PlothandlerPhase(Enum):
    CONSTRUCTED = "constructed"
    SURVEY = "survey"
    SURVEY_DONE = "survey done"
    VISUALIZATION = "visualization"


class Plothandler:
    def __init__(
        self,
        name: str,
        axis: "Axis",
        pointmetainputhandler: Optional[PointMetaHandler] = None,
        config: Optional[PlothandlerConfig] = None,
    ):
        if not name or axis is None:
            raise MissingArgumentError()
        self.name = name
        self.axis = axis
        self.config = copy.deepcopy(config) if config is not None else get_default_plothandler_config()
        self.coordindex = 0
        self.metamin = math.inf
        self.metamax = -math.inf
        self.autocompute_meta_min = True
        self.autocompute_meta_max = True
        self.coords: List[Coord] = []
        self.pointmetainputhandler = pointmetainputhandler
        self.pointmetamap: Optional[PointMetaMap] = None  # built by visualization_phase_init
        self.filtered_coords_away = False
        self.plot_has_jumps = False
        self.context: Optional[PointContext] = None
        self.phase = PlothandlerPhase.CONSTRUCTED
        axis.register_plothandler(self)

    def __str__(self) -> str:
        return f"plot handler {self.name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, phase={self.phase.value!r}, coords={len(self.coords)})"

    def require_phase(self, operation: str, *expected: PlothandlerPhase) -> None:
        if self.phase not in expected:
            raise PhaseError(
                operation,
                " or ".join(phase.value for phase in expected),
                self.phase.value,
            )

    def set_meta_limits(self, min: Optional[float] = None, max: Optional[float] = None) -> None:
        """Fix the point meta range; fixed ends are no longer autocomputed."""

        if min is not None:
            self.metamin = float(min)
            self.autocompute_meta_min = False
        if max is not None:
            self.metamax = float(max)
            self.autocompute_meta_max = False

    # ------------------------------------------------------------------
    # survey hooks

    def survey_before_set_point_meta(self) -> None:
        pass

    def survey_after_set_point_meta(self) -> None:
        pass

    def survey_start(self) -> None:
        self.require_phase("survey_start", PlothandlerPhase.CONSTRUCTED)
        self.phase = PlothandlerPhase.SURVEY
        self.context = PointContext()
        logger.debug("%s: survey started", self)

    def survey_end(self) -> None:
        self.require_phase("survey_end", PlothandlerPhase.SURVEY)
        self.phase = PlothandlerPhase.SURVEY_DONE
        logger.debug("%s: survey finished after %d records", self, self.coordindex)

    # ------------------------------------------------------------------
    # survey phase

    def survey_point(self, record: Record) -> None:
        self.require_phase("survey_point", PlothandlerPhase.SURVEY)
        raw = Coord.from_record(record)
        self.context.bind(raw)

        current = self.axis.parse_coordinate(raw)
        if current.is_valid:
            current = self.axis.prepare_coordinate(current)
            self.axis.update_limits_for_coordinate(current)
        self.context.bind(current)
        self.axis.datapoint_surveyed(current, self)

        self.coordindex += 1

    def survey(self, records: Iterable[Record]) -> None:
        """Run ``survey_start`` and survey every record of ``records``."""

        self.survey_start()
        for record in records:
            self.survey_point(record)

    def add_surveyed_point(self, pt: Coord) -> None:
        self.coords.append(pt)

    def set_per_point_meta(self, pt: Coord) -> None:
        if pt.meta is None and self.pointmetainputhandler is not None:
            self.pointmetainputhandler.assign(pt, self.context)

    def set_per_point_meta_limits(self, pt: Coord) -> None:
        if pt.meta is None:
            return
        if self.pointmetainputhandler is not None and self.pointmetainputhandler.is_symbolic:
            return
        if not is_number(pt.meta):
            raise UnparsedMetaError(pt)
        if self.autocompute_meta_min:
            self.metamin = min(self.metamin, pt.meta)
        if self.autocompute_meta_max:
            self.metamax = max(self.metamax, pt.meta)

    # ------------------------------------------------------------------
    # serialization

    def serialize_coord(self, pt: Coord, to_number: NumberFormatter = to_tex_string) -> str:
        return serialize_coord(pt, to_number)

    def get_coords_in_tex_format(
        self, coords: Iterable[Coord], to_number: NumberFormatter = to_tex_string
    ) -> str:
        return coords_to_tex(coords, self.axis.serialize_coord_private, to_number)

    def surveyed_coords_to_pgfplots(self) -> str:
        return self.get_coords_in_tex_format(self.coords)

    def coords_to_array(self) -> np.ndarray:
        """Surveyed coordinates as an ``(n, 3)`` array, NaN where absent."""

        return coords_as_array(self.coords)

    # ------------------------------------------------------------------
    # visualization phase

    def visualization_phase_init(self) -> None:
        self.require_phase("visualization_phase_init", PlothandlerPhase.SURVEY_DONE)
        if self.pointmetainputhandler is not None and not self.pointmetainputhandler.is_symbolic:
            if self.config.pointmetarel is PointMetaRel.AXISWIDE:
                range_min = self.axis.axiswide_metamin
                range_max = self.axis.axiswide_metamax
            else:
                range_min = self.metamin
                range_max = self.metamax
            self.pointmetamap = PointMetaMap(range_min, range_max, self.config.warn_for_filter_discards)
            logger.debug("%s: point meta range [%s, %s]", self, range_min, range_max)
        self.phase = PlothandlerPhase.VISUALIZATION

    def visualization_transform_meta(self, meta) -> float:
        self.require_phase("visualization_transform_meta", PlothandlerPhase.VISUALIZATION)
        if meta is None:
            logger.warning(
                "could not access the 'point meta' (used for example by scatter plots and color maps)."
                " Maybe you need to add 'point meta=y' or something like that?"
            )
            return NEUTRAL_META
        if self.pointmetamap is None:
            raise PlotSurveyError(f"{self} has no numeric point meta map")
        return self.pointmetamap.map(meta)


class GenericPlothandler(Plothandler):
    """Plot handler with the default survey phase."""


def coords_as_array(coords: Iterable[Coord]) -> np.ndarray:
    rows = [[np.nan if value is None else float(value) for value in pt.x] for pt in coords]
    if not rows:
        return np.empty((0, 3), dtype=np.float64)
    return np.asarray(rows, dtype=np.float64)


__all__ = [
    "GenericPlothandler",
    "NEUTRAL_META",
    "Plothandler",
    "PlothandlerPhase",
    "coords_as_array",
]
