"""
Per-call buffers filled while emitting a layout tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

CSS_SEPARATOR = "\n        "


@dataclass
class RenderContext:
    """
    Collects the output of one emission pass.

    Attributes:
        html: Indented HTML lines in document order.
        css: `#winN {...}` rules, one per styled pane.
        sizes: `"winN":fraction` entries for the resize script.
        count: Last pane id handed out (0 before the first pane).
    """
    html: List[str] = field(default_factory=list)
    css: List[str] = field(default_factory=list)
    sizes: List[str] = field(default_factory=list)
    count: int = 0

    def next_pane_id(self) -> int:
        self.count += 1
        return self.count

    def contents(self) -> str:
        return "\n".join(self.html).strip()

    def stylesheet(self) -> str:
        return CSS_SEPARATOR.join(self.css).strip()

    def size_map(self) -> str:
        """Size entries wrapped as a JavaScript object literal."""
        return "{" + ",".join(self.sizes) + "}"

    def reset(self) -> None:
        self.html.clear()
        self.css.clear()
        self.sizes.clear()
        self.count = 0
