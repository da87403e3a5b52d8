"""Kernel preset loading helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.heuristics import HEURISTICS
from ..core.kernel import Kernel
from ..exceptions import ConfigError, MalformedKernelError
from ..settings import settings

DEFAULT_KERNELS_PATH = Path(__file__).resolve().parent / "kernels.yaml"
DEFAULT_HEURISTIC = "euclidean"


@dataclass
class KernelPreset:
    name: str
    description: str
    kernel: Kernel
    heuristic: str = DEFAULT_HEURISTIC


@dataclass
class SearchDefaults:
    kernel: str
    heuristic: str = DEFAULT_HEURISTIC
    max_expansions: Optional[int] = None


def _resolve_path(config_path: str | Path | None) -> Path:
    if config_path is not None:
        return Path(config_path)
    if settings.KERNELS_PATH:
        return Path(settings.KERNELS_PATH)
    return DEFAULT_KERNELS_PATH


def _load_payload(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Kernel config not found: {path}")
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Kernel config is not valid YAML: {path}", str(e)) from e
    if not isinstance(payload, dict):
        raise ConfigError(f"Kernel config must be a mapping at top level: {path}")
    return payload


def _ensure_heuristic(name: Any, owner: str) -> str:
    normalized = str(name).lower()
    if normalized not in HEURISTICS:
        raise ConfigError(f"{owner} has invalid heuristic '{name}', expected one of {sorted(HEURISTICS)}")
    return normalized


def load_kernel_presets(config_path: str | Path | None = None) -> dict[str, KernelPreset]:
    """Load all kernels from kernels.yaml and return a mapping of name -> KernelPreset."""
    path = _resolve_path(config_path)
    payload = _load_payload(path)

    raw_kernels = payload.get("kernels") or {}
    if not isinstance(raw_kernels, dict):
        raise ConfigError(f"'kernels' must be a mapping of name -> config in {path}")

    presets: dict[str, KernelPreset] = {}
    for name, raw in raw_kernels.items():
        if not isinstance(raw, dict):
            raise ConfigError(f"Kernel '{name}' must be a mapping of fields")
        if "weights" not in raw:
            raise ConfigError(f"Kernel '{name}' is missing required field 'weights'")
        try:
            kernel = Kernel(raw["weights"])
        except MalformedKernelError as e:
            raise ConfigError(f"Kernel '{name}' has malformed weights", e.message) from e

        presets[str(name)] = KernelPreset(
            name=str(name),
            description=str(raw.get("description", "")),
            kernel=kernel,
            heuristic=_ensure_heuristic(raw.get("heuristic", DEFAULT_HEURISTIC), f"Kernel '{name}'"),
        )
    return presets


def load_search_defaults(config_path: str | Path | None = None) -> SearchDefaults:
    """Read the ``defaults`` section; settings.MAX_EXPANSIONS overrides the file value."""
    path = _resolve_path(config_path)
    raw = _load_payload(path).get("defaults") or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'defaults' must be a mapping in {path}")

    max_expansions = raw.get("max_expansions")
    if settings.MAX_EXPANSIONS is not None:
        max_expansions = settings.MAX_EXPANSIONS
    if max_expansions is not None:
        try:
            max_expansions = int(max_expansions)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"'max_expansions' must be an integer in {path}", str(e)) from e
        if max_expansions < 0:
            raise ConfigError(f"'max_expansions' must be >= 0 in {path}")

    return SearchDefaults(
        kernel=str(raw.get("kernel", "diagonal")),
        heuristic=_ensure_heuristic(raw.get("heuristic", DEFAULT_HEURISTIC), "defaults"),
        max_expansions=max_expansions,
    )


def get_kernel_preset(name: str, config_path: str | Path | None = None) -> KernelPreset:
    presets = load_kernel_presets(config_path)
    try:
        return presets[name]
    except KeyError:
        raise ConfigError(f"Unknown kernel '{name}', expected one of {sorted(presets)}") from None


def get_kernel(name: str, config_path: str | Path | None = None) -> Kernel:
    """Return the Kernel for preset ``name``."""
    return get_kernel_preset(name, config_path).kernel


def list_kernels(config_path: str | Path | None = None) -> List[str]:
    return list(load_kernel_presets(config_path))
