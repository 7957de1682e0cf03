# road_gen/io/config.py
from pathlib import Path

import yaml

from road_gen.config.models import RoadMapModel


def load_config(path: str | Path, **overrides) -> RoadMapModel:
    """Read a YAML road map config and validate it.

    Top-level keys in `overrides` replace the file's values (e.g. seed=7).

    Raises:
        FileNotFoundError: if path does not exist
        pydantic.ValidationError: if the content does not describe a valid config
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level, got {type(raw).__name__}")
    raw.update({k: v for k, v in overrides.items() if v is not None})
    return RoadMapModel.model_validate(raw)
