"""
Layout tree parsing, percolation and HTML emission.
"""

from .context import RenderContext
from .errors import FormatIterationLimit, LayoutError, StructureError, StyleTypeError, StyleValueError
from .formatter import build_keywords, format_source
from .node import MAX_DEPTH, LayoutNode, NodeKind, Position, parse_layout
from .show import build_rich_tree, describe_tree, log_tree

__all__ = [
    "RenderContext",
    "FormatIterationLimit",
    "LayoutError",
    "StructureError",
    "StyleTypeError",
    "StyleValueError",
    "build_keywords",
    "format_source",
    "MAX_DEPTH",
    "LayoutNode",
    "NodeKind",
    "Position",
    "parse_layout",
    "build_rich_tree",
    "describe_tree",
    "log_tree",
]
