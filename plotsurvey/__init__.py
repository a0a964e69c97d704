from .axis import Axis
from .config import (
    PlothandlerConfig,
    PointMetaRel,
    UnboundedCoords,
    get_default_plothandler_config,
    set_default_plothandler_config,
)
from .context import PointContext
from .coord import DIRECTION_NAMES, X, Y, Z, Coord, RawRecord
from .errors import (
    InvalidDomainError,
    MissingArgumentError,
    PhaseError,
    PlotSurveyError,
    RejectedExpressionError,
    UnparsedMetaError,
)
from .mapping import POINT_META_RANGE, DatascaleTrafo, LinearMap, PointMetaMap
from .numbers import parse_number, to_tex_string
from .plothandler import GenericPlothandler, Plothandler, PlothandlerPhase
from .pointmeta import (
    X_COORD_ASSIGNMENT,
    Y_COORD_ASSIGNMENT,
    Z_COORD_ASSIGNMENT,
    CoordAssignmentPointMetaHandler,
    ExplicitPointMetaHandler,
    ExpressionPointMetaHandler,
    PointMetaHandler,
    point_meta_handler,
)
from .visualizer import PlotVisualizer, SegmentingPlotVisualizer

__all__ = [
    'Axis',
    'Coord',
    'CoordAssignmentPointMetaHandler',
    'DIRECTION_NAMES',
    'DatascaleTrafo',
    'ExplicitPointMetaHandler',
    'ExpressionPointMetaHandler',
    'GenericPlothandler',
    'InvalidDomainError',
    'LinearMap',
    'MissingArgumentError',
    'POINT_META_RANGE',
    'PhaseError',
    'PlotSurveyError',
    'PlotVisualizer',
    'Plothandler',
    'PlothandlerConfig',
    'PlothandlerPhase',
    'PointContext',
    'PointMetaHandler',
    'PointMetaMap',
    'PointMetaRel',
    'RawRecord',
    'RejectedExpressionError',
    'SegmentingPlotVisualizer',
    'UnboundedCoords',
    'UnparsedMetaError',
    'X',
    'X_COORD_ASSIGNMENT',
    'Y',
    'Y_COORD_ASSIGNMENT',
    'Z',
    'Z_COORD_ASSIGNMENT',
    'get_default_plothandler_config',
    'parse_number',
    'point_meta_handler',
    'set_default_plothandler_config',
    'to_tex_string',
]
