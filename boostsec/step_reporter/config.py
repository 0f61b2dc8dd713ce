"""Reporter configuration loaded from YAML."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from boostsec.step_reporter.models.scope import DEFAULT_SLOW_MS
from boostsec.step_reporter.theme import ColorTheme, SymbolSet


class ReporterConfig(BaseModel):
    """Console reporter settings."""

    use_color: bool = Field(default=True, description="Emit ANSI colors")
    slow: int = Field(
        default=DEFAULT_SLOW_MS,
        gt=0,
        description="Slow threshold in ms for cases that do not carry one",
    )
    symbols: SymbolSet = Field(
        default="auto", description="Status symbol set (auto, unicode, windows)"
    )

    def build_theme(self) -> ColorTheme:
        """Create the color theme described by this configuration."""
        return ColorTheme(use_color=self.use_color, symbols=self.symbols)


def load_config(path: Path | None = None) -> ReporterConfig:
    """Load reporter configuration.

    Args:
        path: Optional YAML file; defaults are used when omitted

    Returns:
        Parsed configuration, with ``NO_COLOR`` forcing colors off

    Raises:
        FileNotFoundError: If ``path`` doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    data: dict[str, object] = {}
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with path.open() as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"Invalid config in {path}: expected a mapping")
            data = loaded

    try:
        config = ReporterConfig.model_validate(data)
    except Exception as e:
        raise ValueError(f"Invalid config schema in {path}: {e}") from e

    if "NO_COLOR" in os.environ:
        config.use_color = False
    return config
