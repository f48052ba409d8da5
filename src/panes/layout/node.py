"""
Recursive split tree behind a multi-pane layout.

A layout description is JSON shaped like::

    {"left": "<p>A</p>", "right": {"top": "B", "bottom": "C", "style": "size:0.4"}}

Every object splits its area in two (`left`/`right` or `top`/`bottom`) or wraps
a single child (`only`). Strings are leaf panes holding raw HTML. A `style`
on an object applies to the pane that object occupies in its parent; the
special `size:<fraction>` declaration sets the pane's share of the split.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from .context import RenderContext
from .errors import StructureError, StyleTypeError, StyleValueError
from .formatter import format_source

logger = logging.getLogger(__name__)

BASE_INDENT = 12
INDENT_STEP = 4
SIZE_KEY = "size"
# Deepest object nesting parse_layout accepts.
MAX_DEPTH = 64


class Position(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    ONLY = "only"


class NodeKind(str, Enum):
    LEAF = "leaf"
    SPLIT = "split"
    WRAP = "wrap"


# Checked in order; the first complete pair wins.
_SPLIT_SHAPES: Tuple[Tuple[Position, Position], ...] = (
    (Position.LEFT, Position.RIGHT),
    (Position.TOP, Position.BOTTOM),
)


@dataclass
class LayoutNode:
    """
    One node of the split tree.

    Attributes:
        kind: Leaf, two-way split, or single-child wrapper.
        children: Ordered (position, child) pairs.
        source: Leaf HTML text; empty for interior nodes.
        styles: Per-child CSS declarations, filled by `percolate`.
        sizes: Per-child fractions, filled by `percolate`.
        pending_style: This node's own declarations, waiting for the parent.
        pending_size: This node's own `size`, waiting for the parent.
    """
    kind: NodeKind
    children: List[Tuple[Position, "LayoutNode"]] = field(default_factory=list)
    source: str = ""
    styles: List[Optional[str]] = field(default_factory=list)
    sizes: List[Optional[float]] = field(default_factory=list)
    pending_style: Optional[str] = None
    pending_size: Optional[float] = None

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    def pane_count(self) -> int:
        """Number of panes (`div`s) this subtree renders."""
        total = 0
        for position, child in self.children:
            if position is not Position.ONLY:
                total += 1
            total += child.pane_count()
        return total

    def percolate(self, depth: int = 0) -> None:
        """
        Move each child's own style/size into this node's slot for that child.

        Runs post-order over the whole subtree. For a split, the second size
        is always derived from the first so the pair sums to 1.
        """
        for index, (position, child) in enumerate(self.children):
            if child.pending_style is not None or child.pending_size is not None:
                self.styles[index] = child.pending_style
                self.sizes[index] = child.pending_size
                child.pending_style = None
                child.pending_size = None
                logger.debug(
                    "Depth %d: absorbed %s style=%r size=%r",
                    depth,
                    position.value,
                    self.styles[index],
                    self.sizes[index],
                )
            child.percolate(depth + 1)

        if self.kind is not NodeKind.SPLIT:
            return
        first, second = self.sizes
        if first is not None:
            self.sizes[1] = 1 - first
        elif second is not None:
            self.sizes[0] = 1 - second

    def emit_html(self, context: RenderContext, keywords: Mapping[str, str], depth: int = 0) -> None:
        """
        Append this subtree's markup, CSS rules and size entries to `context`.
        """
        prefix = " " * (depth * INDENT_STEP + BASE_INDENT)
        for index, (position, child) in enumerate(self.children):
            wrapped = position is not Position.ONLY
            if wrapped:
                pane_id = context.next_pane_id()
                context.html.append(f'{prefix}<div class="resizable-{position.value}" id="win{pane_id}">')
                size = self.sizes[index]
                if size is not None:
                    context.sizes.append(f'"win{pane_id}":{_format_size(size)}')
                style = self.styles[index]
                if style and style.strip():
                    context.css.append(f"#win{pane_id} {{{style}}}")

            if child.is_leaf:
                context.html.append(f"{prefix}    {format_source(child.source, keywords)}")
            else:
                child.emit_html(context, keywords, depth + 1)

            if wrapped:
                context.html.append(f"{prefix}</div>")


def parse_layout(spec: Any, path: str = "$", depth: int = 0) -> LayoutNode:
    """
    Build a layout tree from decoded JSON.

    Args:
        spec: A leaf string or a mapping with `left`/`right`, `top`/`bottom`
            or `only` keys, optionally carrying a `style` string.
        path: Location of `spec` inside the document, used in error messages.
        depth: Nesting level of `spec`; objects deeper than `MAX_DEPTH` are
            rejected.

    Returns:
        The root LayoutNode.

    Raises:
        StructureError: If an object matches no split shape or a value has
            an unsupported type, or nesting exceeds `MAX_DEPTH`.
        StyleTypeError: If `style` is not a string.
        StyleValueError: If the `size` declaration is not a valid fraction.
    """
    if isinstance(spec, str):
        if not spec:
            raise StructureError(f"{path}: leaf pane text must not be empty")
        return LayoutNode(kind=NodeKind.LEAF, source=spec)
    if not isinstance(spec, Mapping):
        raise StructureError(f"{path}: expected a string or an object, got {type(spec).__name__}")

    if depth >= MAX_DEPTH:
        raise StructureError(f"{path}: layout is nested deeper than {MAX_DEPTH} levels")

    positions = _match_shape(spec, path)
    children: List[Tuple[Position, LayoutNode]] = []
    for position in positions:
        child_path = f"{path}.{position.value}"
        children.append((position, parse_layout(spec[position.value], child_path, depth + 1)))
    kind = NodeKind.WRAP if positions == (Position.ONLY,) else NodeKind.SPLIT
    node = LayoutNode(
        kind=kind,
        children=children,
        styles=[None] * len(children),
        sizes=[None] * len(children),
    )

    if "style" in spec:
        style = spec["style"]
        if not isinstance(style, str):
            raise StyleTypeError(f'{path}: "style" must be a string, got {type(style).__name__}')
        node.pending_style, node.pending_size = _split_size(style, path)
    return node


def _match_shape(spec: Mapping[str, Any], path: str) -> Tuple[Position, ...]:
    for pair in _SPLIT_SHAPES:
        if all(position.value in spec for position in pair):
            return pair
    if Position.ONLY.value in spec:
        return (Position.ONLY,)
    keys = ", ".join(sorted(str(key) for key in spec)) or "none"
    raise StructureError(
        f"{path}: undefined location specifier (keys: {keys}); "
        'expected "left"/"right", "top"/"bottom" or "only"'
    )


def _split_size(style: str, path: str) -> Tuple[str, Optional[float]]:
    """
    Pull the first `size:<fraction>` declaration out of a style string.

    Returns the remaining declarations and the size (or None).
    """
    components = style.split(";")
    for index, component in enumerate(components):
        key, _, value = component.partition(":")
        if key.strip() != SIZE_KEY:
            continue
        try:
            size = float(value.strip())
        except ValueError as exc:
            raise StyleValueError(f"{path}: size {value.strip()!r} is not a number") from exc
        if not 0.0 <= size <= 1.0:
            raise StyleValueError(f"{path}: size {size} must be between 0 and 1")
        del components[index]
        return ";".join(components), size
    return style, None


def _format_size(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text
