"""vmark.engine - directive execution and interpolation."""

from vmark.engine.directives import ATTR_ORDER, order_attrs
from vmark.engine.interpolate import Interpolator, format_value, literal
from vmark.engine.result import Removed, Replaced, TraversalResult, Unchanged
from vmark.engine.template import Template

__all__ = [
    "ATTR_ORDER",
    "Interpolator",
    "Removed",
    "Replaced",
    "Template",
    "TraversalResult",
    "Unchanged",
    "format_value",
    "order_attrs",
]
