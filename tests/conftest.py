import json
from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from panes.config import settings


SIMPLE_TEMPLATE = (
    "<head>STYLES<style>CSS</style></head>\n"
    "<body>CONTENTS<script>const sizes = SIZES;</script>SCRIPTS</body>\n"
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("PANES_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PANES_ASSET_URI_PREFIX", raising=False)
    settings.get_settings.cache_clear()
    yield
    settings.get_settings.cache_clear()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample_project(tmp_path: Path) -> dict:
    """
    Write a layout, template and config file for tests and return their paths.
    """
    layout = {
        "left": {"only": "<p>{URI}nav</p>", "style": "background:grey;size:0.25"},
        "right": {"top": "<p>main</p>", "bottom": "<p>log</p>"},
    }
    layout_path = tmp_path / "layout.json"
    layout_path.write_text(json.dumps(layout), encoding="utf-8")

    template_path = tmp_path / "template.html"
    template_path.write_text(SIMPLE_TEMPLATE, encoding="utf-8")

    output_path = tmp_path / "out" / "index.html"
    config_text = textwrap.dedent(
        """
        layout_file = "layout.json"
        template_file = "template.html"
        output_file = "out/index.html"
        css_files = ["css/main.css"]
        script_files = ["js/resize.js"]
        asset_uri_prefix = "https://assets.example/"
        """
    ).strip()
    config_path = tmp_path / "panes.toml"
    config_path.write_text(config_text + "\n", encoding="utf-8")
    return {
        "config": config_path,
        "layout": layout_path,
        "template": template_path,
        "output": output_path,
    }
