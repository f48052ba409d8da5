"""
Exceptions raised while parsing and rendering layout trees.
"""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for problems with a layout description."""


class StructureError(LayoutError):
    """Raised when a layout object matches none of the split shapes."""


class StyleTypeError(LayoutError, TypeError):
    """Raised when a `style` field is present but is not a string."""


class StyleValueError(LayoutError):
    """Raised when a `size` declaration is not a fraction between 0 and 1."""


class FormatIterationLimit(LayoutError):
    """Raised in strict mode when leaf text holds too many placeholders."""
