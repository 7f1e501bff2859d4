"""
Configuration management for beacon-registration.

Typed settings for the registration workflow, read from YAML and validated
with pydantic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Literal, Any, Dict

from pydantic import BaseModel, Field, ValidationError
import yaml


# -----------------------
# Typed config structures
# -----------------------


class PathsConfig(BaseModel):
    input_file: Optional[str] = Field(default=None, description="Scanner report text file")
    output_dir: str = Field(default="output")


class AlignmentConfig(BaseModel):
    min_overlap: int = Field(
        default=12,
        ge=2,
        description="Beacons two overlapping scanners are guaranteed to share "
                    "(a correspondence needs min_overlap - 1 shared distances)",
    )
    orientations: Literal["all", "proper"] = Field(
        default="all",
        description="'all' searches 48 signed axis permutations, 'proper' only the 24 rotations",
    )


class ParallelConfig(BaseModel):
    enabled: bool = Field(default=False, description="Align scanner pairs in worker processes")
    n_workers: Optional[int] = Field(default=None, description="Number of worker processes (None = cpu_count - 1)")


class ExportConfig(BaseModel):
    laz: bool = Field(default=False, description="Write the merged beacon set as a LAS/LAZ point cloud")
    summary_json: bool = Field(default=True, description="Write a JSON summary of scanner poses and answers")


class VisualizationConfig(BaseModel):
    enabled: bool = Field(default=False)
    show_scanners: bool = Field(default=True, description="Draw scanner positions alongside beacons")


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    file: Optional[str] = Field(default=None)


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    parallel: ParallelConfig = Field(default_factory=ParallelConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# -----------------------
# Loader
# -----------------------


def _project_root() -> Path:
    # src/beacon_registration/utils/config.py -> repository root
    return Path(__file__).resolve().parents[3]


def load_config(path: Optional[str | Path] = None, *, allow_missing: bool = True) -> AppConfig:
    """
    Read a YAML file into an AppConfig. Keys left out of the file keep their defaults.

    With no path, config/default.yaml at the repository root is used. A missing
    file yields AppConfig() unless allow_missing is False.

    Raises:
        FileNotFoundError: If the file is missing and allow_missing is False
        ValueError: If the YAML does not validate against AppConfig
    """
    cfg_path = Path(path) if path is not None else _project_root() / "config" / "default.yaml"

    if not cfg_path.exists():
        if allow_missing:
            return AppConfig()
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    with cfg_path.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {cfg_path}: {e}") from e
