import json
from pathlib import Path
from typing import Dict

from typer.testing import CliRunner

from panes import cli


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0, result.output
    assert "panes" in result.output


def test_build_writes_output_and_prints_summary(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    result = runner.invoke(cli.app, ["build", "--config", str(sample_project["config"])])

    assert result.exit_code == 0, result.output
    assert "Build Summary" in result.output
    html = sample_project["output"].read_text(encoding="utf-8")
    assert '<div class="resizable-left" id="win1">' in html


def test_build_output_override(runner: CliRunner, sample_project: Dict[str, Path], tmp_path: Path) -> None:
    target = tmp_path / "elsewhere.html"

    result = runner.invoke(
        cli.app,
        ["build", "--config", str(sample_project["config"]), "--output", str(target)],
    )

    assert result.exit_code == 0, result.output
    assert target.exists()
    assert not sample_project["output"].exists()


def test_build_stdout_prints_document(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    result = runner.invoke(cli.app, ["build", "--config", str(sample_project["config"]), "--stdout"])

    assert result.exit_code == 0, result.output
    assert 'const sizes = {"win1":0.25,"win2":0.75};' in result.output
    assert "Build Summary" not in result.output


def test_build_reports_invalid_layout(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    sample_project["layout"].write_text(json.dumps({"left": "A"}), encoding="utf-8")

    result = runner.invoke(cli.app, ["build", "--config", str(sample_project["config"])])

    assert result.exit_code == 1
    assert "Generation failed" in result.output


def test_build_fallback_writes_error_page(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    sample_project["layout"].write_text(json.dumps({"left": "A"}), encoding="utf-8")

    result = runner.invoke(
        cli.app,
        ["build", "--config", str(sample_project["config"]), "--fallback"],
    )

    assert result.exit_code == 0, result.output
    assert "error page" in result.output


def test_build_reports_config_errors(runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "panes.toml"
    config.write_text('template_file = "t.html"\n', encoding="utf-8")

    result = runner.invoke(cli.app, ["build", "--config", str(config)])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_build_rejects_missing_config(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["build", "--config", str(tmp_path / "nope.toml")])

    assert result.exit_code != 0


def test_show_prints_tree(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    result = runner.invoke(cli.app, ["show", "--layout", str(sample_project["layout"])])

    assert result.exit_code == 0, result.output
    assert "4 panes" in result.output
    assert "size=0.25" in result.output
    assert "bottom" in result.output


def test_check_validates_layout(runner: CliRunner, sample_project: Dict[str, Path]) -> None:
    ok = runner.invoke(cli.app, ["check", "--layout", str(sample_project["layout"])])
    assert ok.exit_code == 0, ok.output
    assert "Layout OK" in ok.output

    sample_project["layout"].write_text(json.dumps({"only": "A", "style": 4}), encoding="utf-8")
    bad = runner.invoke(cli.app, ["check", "--layout", str(sample_project["layout"])])
    assert bad.exit_code == 1
    assert "must be a string" in bad.output


def test_init_then_build(runner: CliRunner, tmp_path: Path) -> None:
    project = tmp_path / "starter"

    created = runner.invoke(cli.app, ["init", str(project)])
    assert created.exit_code == 0, created.output
    assert "Scaffold Summary" in created.output

    built = runner.invoke(cli.app, ["build", "--config", str(project / "panes.toml")])
    assert built.exit_code == 0, built.output
    assert (project / "index.html").exists()
