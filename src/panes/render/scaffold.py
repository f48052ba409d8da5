"""
Create a starter project (config, layout and template) in a directory.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from ..util import write_text_file
from .document import DEFAULT_TEMPLATE

CONFIG_FILENAME = "panes.toml"
LAYOUT_FILENAME = "layout.json"
TEMPLATE_FILENAME = "template.html"

CONFIG_TEMPLATE = """# Generated by `panes init`.
layout_file = {layout}
template_file = {template}
output_file = {output}
css_files = []
script_files = []
"""

SAMPLE_LAYOUT = """{
    "left": {
        "only": "<h2>Navigation</h2>",
        "style": "background:#f4f4f4;size:0.25"
    },
    "right": {
        "top": {
            "only": "<h1>Editor</h1>",
            "style": "size:0.7"
        },
        "bottom": {
            "only": "<pre>Output panel</pre>",
            "style": "background:#1e1e1e;color:#eee"
        }
    }
}
"""


@dataclass
class ScaffoldReport:
    """
    Records which starter files were written or left untouched.

    Attributes:
        root: Directory the project was created in.
        written: Files created or overwritten.
        skipped: Files that already existed.
    """
    root: Path
    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Root", str(self.root))
        yield ("Files written", str(len(self.written)))
        yield ("Files skipped", str(len(self.skipped)))


def _toml_string(value: str) -> str:
    """Quote `value` as a TOML basic string (JSON escapes are valid TOML)."""
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def _write_starter(target: Path, content: str, force: bool, report: ScaffoldReport) -> None:
    if target.exists() and not force:
        report.skipped.append(target)
        return
    write_text_file(target, content)
    report.written.append(target)


def generate_project(root: Path | str, *, force: bool = False, output_name: str = "index.html") -> ScaffoldReport:
    """
    Write a sample config, layout and template into `root`.

    Args:
        root: Target directory, created if missing.
        force: Overwrite files that already exist.
        output_name: File name the sample config compiles to.

    Returns:
        A ScaffoldReport detailing the actions taken.
    """
    resolved = Path(root).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    report = ScaffoldReport(root=resolved)

    config_text = CONFIG_TEMPLATE.format(
        layout=_toml_string(LAYOUT_FILENAME),
        template=_toml_string(TEMPLATE_FILENAME),
        output=_toml_string(output_name),
    )
    _write_starter(resolved / CONFIG_FILENAME, config_text, force, report)
    _write_starter(resolved / LAYOUT_FILENAME, SAMPLE_LAYOUT, force, report)
    _write_starter(resolved / TEMPLATE_FILENAME, DEFAULT_TEMPLATE, force, report)
    return report
