"""Helpers for loading and validating controller configuration."""

from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from expander.core.controller import ControllerDescriptor, PortRegisters
from expander.core.exceptions import ConfigurationError

# Configuration cache with thread safety
_LOADER_CACHE: dict[str, ControllerDescriptor] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(controller_name: str, path: Optional[str] = None) -> str:
    if path is None:
        # Config files are in expander/{controller_name}/config.yaml
        base = Path(__file__).parent.parent / controller_name.lower() / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config {path} must contain a mapping")
    return raw


def _build_port_registers(port_name: str, port_raw: dict[str, Any]) -> PortRegisters:
    try:
        return PortRegisters(
            direction=int(port_raw["direction"]),
            pull_up=int(port_raw["pull_up"]),
            gpio=int(port_raw["gpio"]),
            latch=int(port_raw["latch"]),
        )
    except KeyError as exc:
        raise ConfigurationError(
            f"ports.{port_name}", f"missing register {exc}"
        ) from exc


def _parse_controller_cfg_from_dict(raw: dict[str, Any]) -> ControllerDescriptor:
    try:
        ports_raw = raw["ports"]
        if not isinstance(ports_raw, dict) or not ports_raw:
            raise ConfigurationError("ports", "expected a non-empty mapping of ports")

        return ControllerDescriptor(
            name=str(raw["name"]).upper(),
            address=int(raw["address"]),
            ports=tuple(
                _build_port_registers(name, port_raw)
                for name, port_raw in ports_raw.items()
            ),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc


def load_controller(
    controller_name: str, path: Optional[str] = None
) -> ControllerDescriptor:
    """Load and validate a controller descriptor from a YAML file.

    Args:
        controller_name: Family identifier (e.g., 'mcp23017') for config lookup.
        path: Optional path to YAML config. If None, load bundled
            expander/{controller_name}/config.yaml.

    Returns:
        ControllerDescriptor instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(controller_name=controller_name, path=path))
    raw = _load_yaml_file(p)

    return _parse_controller_cfg_from_dict(raw=raw)


def get_controller_config(controller_name: str) -> ControllerDescriptor:
    """Return the bundled descriptor for a family, loading and caching it.

    THREAD SAFETY: This function is thread-safe.
    """
    key = controller_name.lower()
    with _CACHE_LOCK:
        if key not in _LOADER_CACHE:
            _LOADER_CACHE[key] = load_controller(controller_name=key)
        return _LOADER_CACHE[key]


def clear_config_cache() -> None:
    """Clear all cached descriptors.

    All subsequent calls to get_controller_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
