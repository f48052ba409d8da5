"""
Pydantic models for page configuration files.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class PageConfig(BaseModel):
    """
    Inputs for generating one multi-pane document.

    Attributes:
        layout_file: JSON split-tree description.
        template_file: HTML template; the built-in template is used when unset.
        css_files: Stylesheets linked from the `STYLES` placeholder.
        script_files: Scripts included at the `SCRIPTS` placeholder.
        output_file: Where a compiled copy of the document is written.
        asset_uri_prefix: Prefix added to asset paths (and exposed as `{URI}`).
        config_file: Path of the TOML file this config came from.
    """
    layout_file: Path
    template_file: Optional[Path] = None
    css_files: List[str] = Field(default_factory=list)
    script_files: List[str] = Field(default_factory=list)
    output_file: Optional[Path] = None
    asset_uri_prefix: Optional[str] = None
    config_file: Optional[Path] = None

    model_config = {
        "extra": "forbid",
    }

    @field_validator("css_files", "script_files")
    @classmethod
    def _reject_blank_assets(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip() for item in value]
        if any(not item for item in cleaned):
            raise ValueError("asset paths must not be empty")
        return cleaned


def load_config(path: Path | str) -> PageConfig:
    """
    Load and validate a TOML config file into a PageConfig instance.

    Relative file paths are resolved against the config file's directory.
    Asset entries are kept as written since they end up in the page as URLs.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated PageConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    if "config_file" in raw_data:
        raise ConfigError("config_file is set by the loader and cannot appear in the file.")

    try:
        config = PageConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    base = config_path.parent
    return config.model_copy(
        update={
            "layout_file": _resolve_relative(config.layout_file, base),
            "template_file": _resolve_relative(config.template_file, base),
            "output_file": _resolve_relative(config.output_file, base),
            "config_file": config_path,
        }
    )


def _resolve_relative(value: Optional[Path], base: Path) -> Optional[Path]:
    if value is None:
        return None
    candidate = value.expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate.resolve()
