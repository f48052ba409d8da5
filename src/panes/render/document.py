"""
Assemble the final multi-pane HTML document from a template and a layout file.
"""

from __future__ import annotations

import html
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from ..config import PageConfig, get_settings
from ..layout import LayoutError, LayoutNode, RenderContext, build_keywords, log_tree, parse_layout
from ..util import read_text_file, write_text_file

logger = logging.getLogger(__name__)

PLACEHOLDERS = ("STYLES", "CONTENTS", "CSS", "SIZES", "SCRIPTS")
ASSET_SEPARATOR = "\n        "
_PLACEHOLDER_PATTERN = re.compile("|".join(PLACEHOLDERS))

DEFAULT_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Panes</title>
    STYLES
    <style>
        html, body { height: 100%; margin: 0; }
        .panes-root, .panes-root div { display: flex; box-sizing: border-box; overflow: auto; }
        .panes-root { height: 100%; flex-direction: row; }
        .resizable-left, .resizable-right { flex-direction: column; height: 100%; }
        .resizable-top, .resizable-bottom { flex-direction: column; width: 100%; }
        CSS
    </style>
</head>
<body>
    <div class="panes-root">
            CONTENTS
    </div>
    <script>
        const paneSizes = SIZES;
        for (const [id, size] of Object.entries(paneSizes)) {
            const pane = document.getElementById(id);
            if (pane) { pane.style.flex = `0 0 ${size * 100}%`; }
        }
    </script>
    SCRIPTS
</body>
</html>
"""

ERROR_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Error</title>
</head>
<body>
<h1>ERROR</h1>
{message}
</body>
</html>
"""


class DocumentIOError(RuntimeError):
    """Raised when the template or layout file cannot be read or decoded."""


class FileHost(Protocol):
    """File access the assembler needs from its host."""

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> Path: ...


class LocalFileHost:
    """Reads and writes the local filesystem as UTF-8."""

    def read_text(self, path: Path) -> str:
        return read_text_file(path)

    def write_text(self, path: Path, content: str) -> Path:
        return write_text_file(path, content)


@dataclass
class RenderResult:
    """
    Outcome of one generation call.

    Attributes:
        document: The final HTML (the error page when `failed`).
        pane_count: Number of pane ids handed out.
        css_rules: Number of per-pane CSS rules emitted.
        size_entries: Number of entries in the size map.
        written: Path of the compiled copy, if one was written.
        failed: True when the error page was returned instead of the layout.
    """
    document: str
    pane_count: int = 0
    css_rules: int = 0
    size_entries: int = 0
    written: Optional[Path] = None
    failed: bool = False

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Panes", str(self.pane_count))
        yield ("CSS rules", str(self.css_rules))
        yield ("Size entries", str(self.size_entries))
        yield ("Written to", str(self.written) if self.written else "not written")
        yield ("Status", "error page" if self.failed else "ok")


def uri_ify(path: str, prefix: str = "") -> str:
    """Turn an asset path into the URI the page references."""
    return f"{prefix}{path}"


def resolve_asset_prefix(config: PageConfig) -> str:
    if config.asset_uri_prefix is not None:
        return config.asset_uri_prefix
    return get_settings().asset_uri_prefix


def render_error_page(message: Optional[str] = None) -> str:
    """
    Minimal HTML shell returned when a layout cannot be generated.
    """
    body = f"<p>{html.escape(message, quote=True)}</p>" if message else ""
    return ERROR_TEMPLATE.format(message=body)


def fill_template(template: str, values: Mapping[str, str]) -> str:
    """
    Replace the first occurrence of each placeholder in `template`.

    Substitution happens in one pass over the template, so placeholder names
    that appear inside substituted content are left alone.
    """
    seen: set[str] = set()

    def _replace(match: re.Match[str]) -> str:
        name = match.group(0)
        if name in seen or name not in values:
            return name
        seen.add(name)
        return values[name]

    result = _PLACEHOLDER_PATTERN.sub(_replace, template)
    for name in PLACEHOLDERS:
        if name in values and name not in seen:
            logger.warning("Template has no %s placeholder", name)
    return result


def _asset_tags(config: PageConfig, prefix: str) -> Tuple[str, str]:
    styles: List[str] = [
        f'<link rel="stylesheet" href="{uri_ify(path, prefix)}">' for path in config.css_files
    ]
    scripts: List[str] = [
        f'<script src="{uri_ify(path, prefix)}"></script>' for path in config.script_files
    ]
    return ASSET_SEPARATOR.join(styles), ASSET_SEPARATOR.join(scripts)


def _read(host: FileHost, path: Path, label: str) -> str:
    logger.info("Reading %s from %s", label, path)
    try:
        return host.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentIOError(f"Unable to read {label} file {path}: {exc}") from exc


def load_layout(path: Path, host: Optional[FileHost] = None) -> LayoutNode:
    """
    Read and parse a layout file (without percolating it).

    Raises:
        DocumentIOError: If the file is unreadable, not valid JSON, or too
            deeply nested to decode.
        LayoutError: If the JSON does not describe a valid split tree.
    """
    host = host or LocalFileHost()
    raw = _read(host, path, "layout")
    try:
        spec = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DocumentIOError(f"Invalid JSON in layout file {path}: {exc}") from exc
    except RecursionError as exc:
        raise DocumentIOError(f"Layout file {path} is nested too deeply to decode") from exc
    return parse_layout(spec)


def _load_inputs(config: PageConfig, host: FileHost) -> Tuple[str, LayoutNode]:
    if config.template_file is None:
        logger.info("No template configured; using the built-in template")
        template = DEFAULT_TEMPLATE
    else:
        template = _read(host, config.template_file, "template")
    return template, load_layout(config.layout_file, host)


def build_document(
    config: PageConfig,
    *,
    host: Optional[FileHost] = None,
    fallback: bool = False,
) -> RenderResult:
    """
    Generate the multi-pane document described by `config`.

    Args:
        config: Paths to the template/layout plus asset lists.
        host: File access; defaults to the local filesystem.
        fallback: Return the error page instead of raising when the inputs
            cannot be read or parsed.

    Returns:
        A RenderResult holding the document and emission counts.

    Raises:
        DocumentIOError: If an input file cannot be read or decoded.
        LayoutError: If the layout description is invalid.
    """
    host = host or LocalFileHost()
    try:
        template, root = _load_inputs(config, host)
    except (DocumentIOError, LayoutError) as exc:
        if not fallback:
            raise
        logger.error("Layout generation failed: %s", exc)
        return RenderResult(document=render_error_page(str(exc)), failed=True)

    prefix = resolve_asset_prefix(config)
    context = RenderContext()
    root.percolate()
    root.emit_html(context, build_keywords(prefix))
    log_tree(root)

    styles, scripts = _asset_tags(config, prefix)
    values: Dict[str, str] = {
        "STYLES": styles,
        "CONTENTS": context.contents(),
        "CSS": context.stylesheet(),
        "SIZES": context.size_map(),
        "SCRIPTS": scripts,
    }
    result = RenderResult(
        document=fill_template(template, values),
        pane_count=context.count,
        css_rules=len(context.css),
        size_entries=len(context.sizes),
    )
    context.reset()

    if config.output_file is not None:
        logger.info("Writing compiled document to %s", config.output_file)
        try:
            result.written = host.write_text(config.output_file, result.document)
        except OSError as exc:
            logger.error("Unable to write compiled document to %s: %s", config.output_file, exc)
    return result


def generate(config: PageConfig, **kwargs) -> str:
    """
    Convenience wrapper around `build_document` returning only the HTML.
    """
    return build_document(config, **kwargs).document
