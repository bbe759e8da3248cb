from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Mirrors configs/analysis.yaml so an installed CLI runs without the repo checkout.
DEFAULT_CONFIG: Dict[str, Any] = {
    "runtime": {"output_dir": "results", "log_level": "INFO", "save_series": True, "progress": True},
    "kinematics": {"duration": 15.0, "step": 0.1, "chart_interval": 0.5},
    "uncertainty": {"clamp_budget": True},
}


def load_yaml(path: str | Path) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path.resolve()}")
    with config_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge; values from `override` win, inputs are left untouched."""
    out = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge(out[key], value)
        else:
            out[key] = deepcopy(value)
    return out


def load_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Built-in defaults, overlaid with the YAML file at `path` when one is given."""
    if path is None:
        return deepcopy(DEFAULT_CONFIG)
    return merge(DEFAULT_CONFIG, load_yaml(path))


def get(cfg: Dict[str, Any], key: str, default: Any = None) -> Any:
    """get(cfg, "kinematics.duration", 15.0) -> nested lookup, `default` on any miss."""
    node: Any = cfg
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
