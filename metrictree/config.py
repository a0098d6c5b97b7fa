from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

_SUPPORTED_PRUNING = {"root", "subtree"}
_DEFAULT_MAX_RAISE_STEPS = 100_000


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc


def normalise_pruning(value: str | None) -> str:
    if value is None:
        return "root"
    mode = value.strip().lower()
    if mode not in _SUPPORTED_PRUNING:
        raise ValueError(f"Unsupported pruning mode '{mode}'. Expected one of {_SUPPORTED_PRUNING}.")
    return mode


def normalise_max_raise_steps(value: int | None) -> int:
    if value is None:
        return _DEFAULT_MAX_RAISE_STEPS
    if value < 0:
        raise ValueError(f"max_raise_steps must be non-negative, got {value}.")
    return int(value)


@dataclass(frozen=True)
class RuntimeConfig:
    log_level: str
    enable_diagnostics: bool
    metric: str
    pruning: str
    max_raise_steps: int

    @property
    def raise_steps_capped(self) -> bool:
        return self.max_raise_steps > 0

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        log_level = os.getenv("METRICTREE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        enable_diagnostics = _bool_from_env(
            os.getenv("METRICTREE_ENABLE_DIAGNOSTICS"), default=True
        )
        metric = os.getenv("METRICTREE_METRIC", "euclidean").strip().lower() or "euclidean"
        pruning = normalise_pruning(os.getenv("METRICTREE_PRUNING"))
        max_raise_steps = normalise_max_raise_steps(
            _parse_optional_int(os.getenv("METRICTREE_MAX_RAISE_STEPS"))
        )
        return cls(
            log_level=log_level,
            enable_diagnostics=enable_diagnostics,
            metric=metric,
            pruning=pruning,
            max_raise_steps=max_raise_steps,
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("metrictree")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    config = RuntimeConfig.from_env()
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "log_level": config.log_level,
        "enable_diagnostics": config.enable_diagnostics,
        "metric": config.metric,
        "pruning": config.pruning,
        "max_raise_steps": config.max_raise_steps,
        "raise_steps_capped": config.raise_steps_capped,
    }
