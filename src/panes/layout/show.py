"""
Human-readable dumps of a layout tree for debugging.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from rich.markup import escape
from rich.tree import Tree

from .node import LayoutNode

logger = logging.getLogger(__name__)


def _slot_attributes(node: LayoutNode, index: int) -> List[str]:
    attributes = []
    if index < len(node.styles) and node.styles[index] is not None:
        attributes.append(f"style={node.styles[index]}")
    if index < len(node.sizes) and node.sizes[index] is not None:
        attributes.append(f"size={node.sizes[index]}")
    return attributes


def describe_tree(node: LayoutNode, depth: int = 0) -> List[str]:
    """
    Return one line per child slot, pre-order, prefixed with its depth.

    Example line: ``1     top style=color:red size=0.3 src=<p>A</p>``
    """
    lines: List[str] = []
    indent = " " * (depth * 4)
    for index, (position, child) in enumerate(node.children):
        parts = [position.value, *_slot_attributes(node, index)]
        if child.is_leaf:
            parts.append(f"src={child.source}")
        lines.append(f"{depth} {indent}{' '.join(parts)}")
        lines.extend(describe_tree(child, depth + 1))
    return lines


def log_tree(node: LayoutNode, level: int = logging.DEBUG) -> None:
    for line in describe_tree(node):
        logger.log(level, line)


def build_rich_tree(node: LayoutNode, label: Optional[str] = None) -> Tree:
    """Render the tree as a `rich` Tree for terminal output."""
    tree = Tree(label or f"[bold]layout[/] ({node.pane_count()} panes)")
    _add_branches(tree, node)
    return tree


def _add_branches(branch: Tree, node: LayoutNode) -> None:
    for index, (position, child) in enumerate(node.children):
        label = f"[cyan]{position.value}[/]"
        attributes = _slot_attributes(node, index)
        if attributes:
            label += " " + escape(" ".join(attributes))
        if child.is_leaf:
            label += f" [dim]{escape(child.source)}[/]"
        _add_branches(branch.add(label), child)
