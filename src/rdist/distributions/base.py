"""Core distribution registry infrastructure."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from importlib import import_module, metadata
from pathlib import Path
from typing import Any

import yaml

DistributionFunction = Callable[..., Any]

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "rdist.distributions"
CONFIG_ENV_VAR = "RDIST_DISTRIBUTIONS"

_FUNCTION_FIELDS = ("density", "cdf", "quantile", "random")


@dataclass(slots=True)
class Distribution:
    """Group the R-style d/p/q/r functions of one distribution family."""

    name: str
    parameters: tuple[str, ...]
    density: DistributionFunction
    cdf: DistributionFunction | None = None
    quantile: DistributionFunction | None = None
    random: DistributionFunction | None = None
    notes: str | None = None

    @property
    def functions(self) -> tuple[str, ...]:
        """Names of the functions this family provides."""
        return tuple(kind for kind in _FUNCTION_FIELDS if getattr(self, kind) is not None)

    def function(self, kind: str) -> DistributionFunction:
        """Return the ``density``/``cdf``/``quantile``/``random`` callable."""
        if kind not in _FUNCTION_FIELDS:
            raise ValueError(
                f"Unknown function kind '{kind}'. Expected one of {', '.join(_FUNCTION_FIELDS)}."
            )
        func = getattr(self, kind)
        if func is None:
            raise ValueError(f"Distribution '{self.name}' does not provide a {kind} function.")
        return func


_REGISTRY: dict[str, Distribution] = {}


def list_distributions() -> Iterable[str]:
    """Return registered distribution names."""
    return sorted(_REGISTRY.keys())


def get_distribution(name: str) -> Distribution:
    """Retrieve a distribution by name."""
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown distribution '{name}'.")
    return _REGISTRY[key]


def register_distribution(distribution: Distribution, *, overwrite: bool = False) -> None:
    """Register a distribution in the global registry."""
    key = distribution.name.lower()
    if key in _REGISTRY and not overwrite:
        raise ValueError(f"Distribution '{distribution.name}' already registered.")
    _REGISTRY[key] = distribution


def clear_registry() -> None:
    """Reset the registry (primarily for testing)."""
    _REGISTRY.clear()


def _from_mapping(candidate: Mapping[str, Any]) -> Distribution:
    functions = {
        kind: _load_object(candidate[kind]) if candidate.get(kind) else None
        for kind in _FUNCTION_FIELDS
    }
    return Distribution(
        name=str(candidate["name"]),
        parameters=tuple(str(param) for param in candidate.get("parameters", [])),
        density=functions["density"],
        cdf=functions["cdf"],
        quantile=functions["quantile"],
        random=functions["random"],
        notes=candidate.get("notes"),
    )


def _iter_distributions(candidate: Any) -> Iterable[Distribution]:
    if isinstance(candidate, Distribution):
        yield candidate
    elif isinstance(candidate, Mapping) and "name" in candidate and "density" in candidate:
        yield _from_mapping(candidate)
    elif isinstance(candidate, Iterable) and not isinstance(candidate, str | bytes):
        for item in candidate:
            yield from _iter_distributions(item)
    elif callable(candidate):
        yield from _iter_distributions(candidate())
    else:
        raise TypeError(
            "Unsupported distribution specification. Expected Distribution, iterable of "
            "Distribution instances, a callable returning them, or a mapping with "
            "name/density keys."
        )


def _load_object(path: str) -> Any:
    module_name, _, attribute = path.partition(":")
    if not attribute:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ValueError(f"Invalid import path '{path}'. Expected 'module:callable'.")
    module = import_module(module_name)
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise AttributeError(f"Module '{module_name}' has no attribute '{attribute}'.") from exc


def load_entry_points(group: str = ENTRY_POINT_GROUP) -> list[str]:
    """Discover third-party distributions via entry points."""
    loaded: list[str] = []
    try:
        candidates = metadata.entry_points().select(group=group)
    except Exception as exc:  # pragma: no cover - discovery failure
        logger.debug("Entry point discovery failed: %s", exc)
        return loaded

    for ep in candidates:
        try:
            for dist in _iter_distributions(ep.load()):
                register_distribution(dist, overwrite=True)
                loaded.append(dist.name)
        except Exception as exc:  # pragma: no cover - plugin failure
            logger.warning("Failed to load distribution entry point '%s': %s", ep.name, exc)
    return loaded


def load_yaml_config(path: str | os.PathLike[str]) -> list[str]:
    """Register distributions listed in a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping distribution config %s (file not found)", path)
        return []

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse distribution config %s: %s", path, exc)
        return []

    registered: list[str] = []
    for item in data.get("distributions", []):
        overwrite = item.get("overwrite", True)
        try:
            if "callable" in item:
                factory = _load_object(item["callable"])
                produced = factory(*item.get("args", []), **item.get("kwargs", {}))
            else:
                produced = item
            for dist in _iter_distributions(produced):
                register_distribution(dist, overwrite=overwrite)
                registered.append(dist.name)
        except (AttributeError, ImportError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Failed to register distribution from %s (spec=%s): %s",
                path,
                item,
                exc,
            )
    return registered


def load_config_paths(value: str | None = None) -> list[str]:
    """Load every YAML file named in ``RDIST_DISTRIBUTIONS`` (path-separated)."""
    value = os.environ.get(CONFIG_ENV_VAR) if value is None else value
    registered: list[str] = []
    for item in (value or "").split(os.pathsep):
        if item:
            registered.extend(load_yaml_config(item))
    return registered


__all__ = [
    "Distribution",
    "DistributionFunction",
    "ENTRY_POINT_GROUP",
    "CONFIG_ENV_VAR",
    "list_distributions",
    "get_distribution",
    "register_distribution",
    "clear_registry",
    "load_entry_points",
    "load_yaml_config",
    "load_config_paths",
]
