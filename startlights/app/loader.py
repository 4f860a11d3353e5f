from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

import yaml

from startlights.api.config import TrainerConfig


def load_settings(path: Path) -> Dict[str, Any]:
    """Reads a settings yaml (flat mapping of TrainerConfig field names)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing settings file {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def config_from_settings(settings: Dict[str, Any], **overrides: Any) -> TrainerConfig:
    """
    Builds a TrainerConfig from settings, then applies overrides (launcher flags).
    Overrides set to None are ignored; unknown setting names raise.
    """
    known = set(TrainerConfig.__dataclass_fields__)
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")

    values = dict(settings)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return TrainerConfig(**values)
