"""Strategies assigning the per point meta value during the survey phase.

Every handler fills ``Coord.meta`` of a point whose meta is still unset.
Two flags describe the handler to the plot handler:

``is_symbolic``
    Symbolic meta is kept verbatim. It takes no part in the meta limits and
    is never normalized to the point meta range.

``explicit_input``
    The coordinate records are expected to carry a separate meta field next
    to the coordinates.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from .context import PointContext
from .coord import DIRECTION_NAMES, X, Y, Z, Coord
from .errors import MissingArgumentError, RejectedExpressionError, UnparsedMetaError
from .numbers import is_number, parse_number

logger = logging.getLogger(__name__)

ExpressionEvaluator = Callable[[str, PointContext], Any]
Expression = Union[str, Callable[[PointContext], Any]]


class PointMetaHandler:
    def __init__(self, is_symbolic: bool = False, explicit_input: bool = False):
        self.is_symbolic = is_symbolic
        self.explicit_input = explicit_input

    def assign(self, pt: Coord, context: Optional[PointContext] = None) -> None:
        raise NotImplementedError("This instance of PointMetaHandler is not implemented")


class CoordAssignmentPointMetaHandler(PointMetaHandler):
    """Uses one of the point's coordinates as its meta value."""

    def __init__(self, dir: int):
        super().__init__(is_symbolic=False, explicit_input=False)
        if dir is None:
            raise MissingArgumentError("nil argument for 'dir' is unsupported.")
        if dir not in (X, Y, Z):
            raise ValueError(f"invalid direction {dir!r}")
        self.dir = dir

    def assign(self, pt: Coord, context: Optional[PointContext] = None) -> None:
        if pt is None:
            raise MissingArgumentError()
        if pt.meta is None:
            pt.meta = parse_number(pt.x[self.dir])

    def __repr__(self) -> str:
        return f"CoordAssignmentPointMetaHandler({DIRECTION_NAMES[self.dir]})"


X_COORD_ASSIGNMENT = CoordAssignmentPointMetaHandler(X)
Y_COORD_ASSIGNMENT = CoordAssignmentPointMetaHandler(Y)
Z_COORD_ASSIGNMENT = CoordAssignmentPointMetaHandler(Z)


class ExplicitPointMetaHandler(PointMetaHandler):
    """Takes the meta field of the unfiltered input record."""

    def __init__(self, symbolic: bool = False):
        super().__init__(is_symbolic=symbolic, explicit_input=True)

    def assign(self, pt: Coord, context: Optional[PointContext] = None) -> None:
        if pt.meta is not None:
            return
        if pt.unfiltered is None or pt.unfiltered.meta is None:
            return
        if self.is_symbolic:
            pt.meta = pt.unfiltered.meta
            return
        meta = parse_number(pt.unfiltered.meta)
        if meta is None:
            raise UnparsedMetaError(pt)
        pt.meta = meta

    def __repr__(self) -> str:
        return f"ExplicitPointMetaHandler(symbolic={self.is_symbolic})"


class ExpressionPointMetaHandler(PointMetaHandler):
    """Evaluates an expression in the context of the current point.

    ``expression`` is either a callable receiving the ``PointContext`` or a
    string which is handed to ``evaluator`` together with the context.
    """

    def __init__(self, expression: Expression, evaluator: Optional[ExpressionEvaluator] = None):
        super().__init__(is_symbolic=False, explicit_input=False)
        if expression is None:
            raise MissingArgumentError()
        if not callable(expression) and evaluator is None:
            raise MissingArgumentError(f"point meta={expression}: an expression evaluator is required")
        self.expression = expression
        self.evaluator = evaluator

    def _evaluate(self, context: PointContext) -> Any:
        if callable(self.expression):
            return self.expression(context)
        return self.evaluator(self.expression, context)

    def assign(self, pt: Coord, context: Optional[PointContext] = None) -> None:
        if pt.meta is not None:
            return
        if context is None:
            context = PointContext(pt)
        try:
            value = self._evaluate(context)
        except (ArithmeticError, AttributeError, LookupError, NameError, TypeError, ValueError) as exc:
            raise RejectedExpressionError(self.expression, str(exc)) from exc
        if not is_number(value):
            value = parse_number(value)
        if value is None:
            raise RejectedExpressionError(self.expression)
        pt.meta = float(value)
        logger.debug("point meta=%s evaluated to %s for %s", self.expression, pt.meta, pt)

    def __repr__(self) -> str:
        return f"ExpressionPointMetaHandler({self.expression!r})"


def point_meta_handler(
    source: Optional[str], *, evaluator: Optional[ExpressionEvaluator] = None
) -> Optional[PointMetaHandler]:
    """Resolve a ``point meta=<source>`` choice to its handler."""

    if source is None:
        return None
    key = " ".join(source.split()).lower()
    if key in ("", "none"):
        return None
    if key == "x":
        return X_COORD_ASSIGNMENT
    if key == "y":
        return Y_COORD_ASSIGNMENT
    if key == "z":
        return Z_COORD_ASSIGNMENT
    if key == "explicit":
        return ExplicitPointMetaHandler()
    if key == "explicit symbolic":
        return ExplicitPointMetaHandler(symbolic=True)
    return ExpressionPointMetaHandler(source, evaluator=evaluator)


__all__ = [
    "CoordAssignmentPointMetaHandler",
    "ExplicitPointMetaHandler",
    "ExpressionEvaluator",
    "ExpressionPointMetaHandler",
    "PointMetaHandler",
    "X_COORD_ASSIGNMENT",
    "Y_COORD_ASSIGNMENT",
    "Z_COORD_ASSIGNMENT",
    "point_meta_handler",
]
