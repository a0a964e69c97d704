"""Visualization phase: transforms a surveyed plot without modifying it."""

from __future__ import annotations

import logging
from typing import List

import numpy as np

from .coord import Coord
from .errors import MissingArgumentError
from .logging_utils import apply_debug_logging
from .plothandler import Plothandler, PlothandlerPhase, coords_as_array

logger = logging.getLogger(__name__)


class PlotVisualizer:
    """Transforms and finalizes the surveyed coordinates of a plot handler.

    The output is a new list of ``Coord``; ``source_plothandler.coords`` is
    left untouched.
    """

    def __init__(self, source_plothandler: Plothandler):
        if source_plothandler is None:
            raise MissingArgumentError()
        self.axis = source_plothandler.axis
        self.source_plothandler = source_plothandler

    def get_visualization_output(self) -> List[Coord]:
        handler = self.source_plothandler
        handler.require_phase(
            "get_visualization_output",
            PlothandlerPhase.SURVEY_DONE,
            PlothandlerPhase.VISUALIZATION,
        )
        transform_meta = handler.phase is PlothandlerPhase.VISUALIZATION and handler.pointmetamap is not None

        result: List[Coord] = []
        for source in handler.coords:
            pt = source.clone()
            if pt.is_valid:
                self.visphase_get_point(pt)
                if transform_meta:
                    pt.metatransformed = handler.visualization_transform_meta(pt.meta)
            else:
                self.notify_jump(pt)
            result.append(pt)
        return result

    def notify_jump(self, pt: Coord) -> None:
        pass

    def visphase_get_point(self, pt: Coord) -> None:
        pt.untransformed = list(pt.x)
        self.axis.visphase_transform_coordinate(pt)

    def visualized_coords_to_pgfplots(self) -> str:
        return self.source_plothandler.get_coords_in_tex_format(self.get_visualization_output())

    @staticmethod
    def as_array(points: List[Coord]) -> np.ndarray:
        return coords_as_array(points)


class SegmentingPlotVisualizer(PlotVisualizer):
    """Splits the visualized plot into polylines at every jump."""

    def __init__(self, source_plothandler: Plothandler):
        super().__init__(source_plothandler)
        self.segments: List[List[Coord]] = []

    def get_visualization_output(self) -> List[Coord]:
        self.segments = [[]]
        result = super().get_visualization_output()
        self.segments = [segment for segment in self.segments if segment]
        return result

    def visphase_get_point(self, pt: Coord) -> None:
        super().visphase_get_point(pt)
        self.segments[-1].append(pt)

    def notify_jump(self, pt: Coord) -> None:
        if self.segments[-1]:
            self.segments.append([])


apply_debug_logging(globals(), logger=logger)
