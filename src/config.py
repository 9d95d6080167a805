"""docmd configuration management.

Loads configuration from .docmd/config.toml if present, with sensible defaults.
Configuration hierarchy (highest priority first):
1. Command-line flags
2. Repo-level config (.docmd/config.toml)
3. Defaults
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from src.markdown.renderer import DEFAULT_MAX_COLUMNS

CONFIG_DIR = ".docmd"
CONFIG_FILE = "config.toml"


@dataclass
class RenderConfig:
    """Configuration for rendering documents."""

    max_columns: int = DEFAULT_MAX_COLUMNS

    def __post_init__(self) -> None:
        if self.max_columns < 1:
            raise ValueError(f"max_columns must be positive, got {self.max_columns}")


@dataclass
class TemplatesConfig:
    """Configuration for template expansion."""

    params_file: str | None = None  # Relative to the workspace


@dataclass
class DocmdConfig:
    """docmd configuration."""

    render: RenderConfig = field(default_factory=RenderConfig)
    templates: TemplatesConfig = field(default_factory=TemplatesConfig)

    def get_max_columns(self, *, width: int | None = None) -> int:
        """Determine the render width.

        Args:
            width: CLI override.

        Returns:
            Maximum line width to wrap text at.
        """
        if width is not None:
            return width
        return self.render.max_columns

    def get_params_path(self, workspace: Path, *, params_path: Path | None = None) -> Path | None:
        """Determine the params document used for template expansion.

        Args:
            workspace: Path to the workspace root.
            params_path: CLI override.

        Returns:
            Path to the params document, or None when expansion is disabled.
        """
        if params_path is not None:
            return params_path
        if self.templates.params_file:
            return workspace / self.templates.params_file
        return None


def load_config(workspace: Path) -> DocmdConfig:
    """Load configuration from .docmd/config.toml if it exists.

    Args:
        workspace: Path to the workspace/repository root.

    Returns:
        DocmdConfig with values from config file or defaults.
    """
    config_path = workspace / CONFIG_DIR / CONFIG_FILE

    if not config_path.exists():
        return DocmdConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    render_data = data.get("render", {})
    templates_data = data.get("templates", {})

    return DocmdConfig(
        render=RenderConfig(max_columns=render_data.get("max_columns", DEFAULT_MAX_COLUMNS)),
        templates=TemplatesConfig(params_file=templates_data.get("params_file")),
    )
