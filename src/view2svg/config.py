"""
Configuration management for view2svg.

Loads YAML configuration with deterministic defaults for every stage of the
export pipeline.
"""

import os
from dataclasses import asdict, dataclass, field, fields
from typing import Optional

import yaml


@dataclass
class ProjectionConfig:
    """Configuration for projection and canvas normalization."""
    scale: float = 100.0  # output units per world unit
    precision: Optional[int] = None  # decimal places for output coordinates, None = unrounded


@dataclass
class TessellationConfig:
    """Configuration for curve discretization."""
    arc_segments: int = 10  # fixed subdivision for curves met as geometry nodes
    max_angle_degrees: float = 15.0
    chord_tolerance: float = 0.01  # world units
    bezier_flatness: float = 0.01  # world units
    max_subdivision_depth: int = 12


@dataclass
class GeometryConfig:
    """Configuration for geometry traversal."""
    min_segment_length: float = 1e-9
    max_instance_depth: int = 32


@dataclass
class StrokeConfig:
    """Configuration for stroke rendering."""
    width: float = 1.0
    color: str = "black"


@dataclass
class OutputConfig:
    """Configuration for written artifacts."""
    filename: str = "active_view_export.svg"
    write_report: bool = True


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class ExportConfig:
    """Complete export configuration."""
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    tessellation: TessellationConfig = field(default_factory=TessellationConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    stroke: StrokeConfig = field(default_factory=StrokeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


def load_config(config_path=None):
    """
    Load configuration from a YAML file.

    Falls back to defaults for any missing values; unknown keys are ignored.
    """
    config = ExportConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into the config dataclass, section by section."""
    for section in fields(config):
        values = yaml_data.get(section.name)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section.name)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save default configuration to a YAML file for reference."""
    yaml_data = asdict(ExportConfig())

    # Runtime-only tracing destination
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
