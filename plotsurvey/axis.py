"""Axis state shared by all plots of one plotting environment.

The axis owns the axis limits, the dimensionality of the environment and the
policy deciding what happens to points that are filtered away. Every plot
handler attached to the axis mutates it during its survey phase, in the
order the plots are surveyed; the visualization phase only reads it.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List, Optional

from .config import UnboundedCoords
from .coord import DIRECTION_NAMES, X, Y, Z, Coord
from .errors import MissingArgumentError, PlotSurveyError
from .logging_utils import apply_debug_logging
from .mapping import DatascaleTrafo
from .numbers import is_finite, parse_number, string_or_default, to_tex_string
from .printer import axis_limit, bool_flag, key_value, serialize_coord

if TYPE_CHECKING:  # pragma: no cover
    from .plothandler import Plothandler

logger = logging.getLogger(__name__)


class Axis:
    def __init__(self, *, clip_limits: bool = True):
        self.is3d = False
        self.clip_limits = clip_limits
        self.autocompute_all_limits = True
        self.autocompute_min = [True, True, True]
        self.autocompute_max = [True, True, True]
        self.is_linear = [True, True, True]
        self.min = [math.inf, math.inf, math.inf]
        self.max = [-math.inf, -math.inf, -math.inf]
        self.datamin = [math.inf, math.inf, math.inf]
        self.datamax = [-math.inf, -math.inf, -math.inf]
        self.axiswide_metamin = math.inf
        self.axiswide_metamax = -math.inf
        self.plothandlers: List["Plothandler"] = []
        # needed during the visualization phase:
        self.datascale_trafo: List[Optional[DatascaleTrafo]] = [None, None, None]

    def __repr__(self) -> str:
        return f"Axis(is3d={self.is3d}, min={self.min}, max={self.max})"

    # ------------------------------------------------------------------
    # configuration

    def set_limits(self, dir: int, min: Optional[float] = None, max: Optional[float] = None) -> None:
        """Fix the limits of ``dir``; a fixed limit is no longer autocomputed."""

        if min is not None:
            self.min[dir] = float(min)
            self.autocompute_min[dir] = False
        if max is not None:
            self.max[dir] = float(max)
            self.autocompute_max[dir] = False
        if not all(self.autocompute_min) or not all(self.autocompute_max):
            self.autocompute_all_limits = False

    def set_datascale_trafo(self, dir: int, trafo: DatascaleTrafo) -> None:
        if trafo is None:
            raise MissingArgumentError()
        self.datascale_trafo[dir] = trafo

    def register_plothandler(self, plothandler: "Plothandler") -> None:
        self.plothandlers.append(plothandler)

    def loop_max(self) -> int:
        return 3 if self.is3d else 2

    # ------------------------------------------------------------------
    # extension hooks

    def prepare_coord(self, dir: int, value):
        """Apply user transformations and logs to one raw coordinate."""

        return value

    def prepare_coordinate(self, pt: Coord) -> Coord:
        return pt

    def add_visualization_dependencies(self, pt: Coord) -> Coord:
        return pt

    # ------------------------------------------------------------------
    # survey phase

    def validate_coord(self, dir: int, pt: Coord) -> None:
        if dir is None or pt is None:
            raise MissingArgumentError()
        result = parse_number(pt.x[dir])
        if result is not None and not math.isfinite(result):
            result = None
            pt.unbounded_dir = dir
        pt.x[dir] = result

    def parse_coordinate(self, raw: Coord) -> Coord:
        """Return the validated counterpart of the raw coordinate ``raw``.

        Blank fields of ``raw`` are normalized to ``None`` in place. The
        result is either complete in every active direction or invalid in
        all of them; it keeps a copy of the raw values in ``unfiltered``.
        """

        for i in range(3):
            raw.x[i] = string_or_default(raw.x[i], None)
        raw.meta = string_or_default(raw.meta, None)

        if raw.x[Z] is not None and not self.is3d:
            logger.debug("third coordinate %r switches the axis to 3D", raw.x[Z])
            self.is3d = True

        result = Coord()
        result.unfiltered = Coord(x=list(raw.x), meta=raw.meta)

        for i in range(self.loop_max()):
            result.x[i] = self.prepare_coord(i, raw.x[i])

        for i in range(self.loop_max()):
            self.validate_coord(i, result)

        if any(result.x[i] is None for i in range(self.loop_max())):
            result.x = [None, None, None]

        return result

    def update_limits_for_coordinate(self, pt: Coord) -> None:
        is_clipped = False
        if self.clip_limits:
            for i in range(self.loop_max()):
                if not self.autocompute_min[i]:
                    is_clipped = is_clipped or pt.x[i] < self.min[i]
                if not self.autocompute_max[i]:
                    is_clipped = is_clipped or pt.x[i] > self.max[i]

        if not is_clipped:
            for i in range(self.loop_max()):
                if self.autocompute_min[i]:
                    self.min[i] = min(pt.x[i], self.min[i])
                if self.autocompute_max[i]:
                    self.max[i] = max(pt.x[i], self.max[i])

        # with all limits autocomputed, the data range equals the axis range
        if not self.autocompute_all_limits:
            for i in range(self.loop_max()):
                self.datamin[i] = min(pt.x[i], self.min[i])
                self.datamax[i] = max(pt.x[i], self.max[i])

    def datapoint_surveyed(self, pt: Coord, plothandler: "Plothandler") -> None:
        """Accept, drop or turn ``pt`` into a jump for ``plothandler``."""

        if pt is None or plothandler is None:
            raise MissingArgumentError()

        if pt.is_valid:
            plothandler.survey_before_set_point_meta()
            plothandler.set_per_point_meta(pt)
            plothandler.set_per_point_meta_limits(pt)
            plothandler.survey_after_set_point_meta()
            plothandler.add_surveyed_point(self.add_visualization_dependencies(pt))
            return

        policy = plothandler.config.unbounded_coords
        if policy is UnboundedCoords.JUMP and pt.unbounded_dir is not None:
            plothandler.plot_has_jumps = True
            plothandler.add_surveyed_point(self.add_visualization_dependencies(pt))
            return

        plothandler.filtered_coords_away = True
        if plothandler.config.warn_for_filter_discards:
            if pt.unbounded_dir is None:
                reason = "of a coordinate filter."
            else:
                reason = f"it is unbounding (in {DIRECTION_NAMES[pt.unbounded_dir]})."
            logger.warning("NOTE: coordinate %s has been dropped because %s", pt, reason)

    def update_axiswide_meta_limits(self, plothandler: "Plothandler") -> None:
        if is_finite(plothandler.metamin):
            self.axiswide_metamin = min(self.axiswide_metamin, plothandler.metamin)
        if is_finite(plothandler.metamax):
            self.axiswide_metamax = max(self.axiswide_metamax, plothandler.metamax)

    def serialize_coord_private(self, pt: Coord) -> str:
        meta = pt.metatransformed if pt.metatransformed is not None else pt.meta
        return to_tex_string(meta)

    def survey_to_pgfplots(self, plothandler: "Plothandler") -> str:
        """Finish the survey of ``plothandler`` and summarize it for the host."""

        plothandler.survey_end()
        self.update_axiswide_meta_limits(plothandler)

        first_coord = plothandler.coords[0] if plothandler.coords else Coord()
        last_coord = plothandler.coords[-1] if plothandler.coords else Coord()

        result = "".join(
            [
                axis_limit("@xmin", self.min[X]),
                axis_limit("@ymin", self.min[Y]),
                axis_limit("@zmin", self.min[Z]),
                axis_limit("@xmax", self.max[X]),
                axis_limit("@ymax", self.max[Y]),
                axis_limit("@zmax", self.max[Z]),
                key_value("point meta min", to_tex_string(plothandler.metamin)),
                key_value("point meta max", to_tex_string(plothandler.metamax)),
                key_value("@is3d", "true" if self.is3d else "false"),
                key_value("@first coord", "{" + serialize_coord(first_coord) + "}"),
                key_value("@last coord", "{" + serialize_coord(last_coord) + "}"),
                key_value("@plot has jumps", bool_flag(plothandler.plot_has_jumps)),
                key_value("@filtered coords away", bool_flag(plothandler.filtered_coords_away)),
                key_value("@surveyed coordindex", str(plothandler.coordindex)),
            ]
        )
        logger.info(
            "%s surveyed: %d of %d coordinates kept (jumps=%s, filtered=%s)",
            plothandler,
            len(plothandler.coords),
            plothandler.coordindex,
            plothandler.plot_has_jumps,
            plothandler.filtered_coords_away,
        )
        return result

    # ------------------------------------------------------------------
    # visualization phase

    def visphase_transform_coordinate(self, pt: Coord) -> None:
        for i, value in enumerate(pt.x):
            if value is None:
                continue
            trafo = self.datascale_trafo[i]
            if trafo is None:
                raise PlotSurveyError(f"no data scale transformation for direction {DIRECTION_NAMES[i]}")
            pt.x[i] = trafo.map(value)


apply_debug_logging(globals(), logger=logger)
