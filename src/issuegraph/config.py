"""Configuration management for issuegraph using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models.issue import strip_surrogates

CONFIG_FILENAME = ".issuegraph.json"


class GraphFormat(str, Enum):
    """Output format types."""
    JSON = "json"
    DOT = "dot"
    MERMAID = "mermaid"
    SVG = "svg"
    PNG = "png"

    @property
    def is_snapshot(self) -> bool:
        return self in (GraphFormat.SVG, GraphFormat.PNG)


class LayoutPreset(str, Enum):
    """Spacing presets for snapshot layout."""
    COMPACT = "compact"
    ROOMY = "roomy"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ExportConfig(BaseModel):
    """Settings for a single graph export.

    ``format`` left as None means "infer from the output path".
    """
    format: GraphFormat | None = None
    label: str | None = None
    root: str | None = None
    depth: int = 0
    preset: LayoutPreset = LayoutPreset.COMPACT
    title: str | None = None
    data_hash: str | None = Field(alias="dataHash", default=None)
    include_related: bool = Field(alias="includeRelated", default=False)
    show_no_dependencies_node: bool = Field(alias="showNoDependenciesNode", default=False)

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        if isinstance(v, str):
            v = v.strip().lower().lstrip(".")
            return v or None
        return v

    @field_validator("preset", mode="before")
    @classmethod
    def normalize_preset(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or LayoutPreset.COMPACT
        return v

    @field_validator("label", "root", "title", "data_hash", mode="before")
    @classmethod
    def clean_text(cls, v):
        return strip_surrogates(v)

    @field_validator("depth")
    @classmethod
    def validate_depth(cls, v):
        if v < 0:
            raise ValueError("depth must be >= 0 (0 = unlimited)")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class IssueGraphConfig(BaseModel):
    """Complete issuegraph configuration model."""
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> IssueGraphConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .issuegraph.json

    Returns:
        IssueGraphConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return IssueGraphConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    return IssueGraphConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .issuegraph.json by searching up the directory tree."""
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
