"""
Document assembly and project scaffolding.
"""

from .document import (
    DEFAULT_TEMPLATE,
    DocumentIOError,
    FileHost,
    LocalFileHost,
    RenderResult,
    build_document,
    fill_template,
    generate,
    load_layout,
    render_error_page,
    uri_ify,
)
from .scaffold import ScaffoldReport, generate_project

__all__ = [
    "DEFAULT_TEMPLATE",
    "DocumentIOError",
    "FileHost",
    "LocalFileHost",
    "RenderResult",
    "build_document",
    "fill_template",
    "generate",
    "load_layout",
    "render_error_page",
    "uri_ify",
    "ScaffoldReport",
    "generate_project",
]
