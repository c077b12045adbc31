from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

_LOGGER = logging.getLogger("vptreex")

_SEARCH_ORDERS = {"near-first", "left-first"}
_DEFAULT_METRIC = "euclidean"
_DEFAULT_SEARCH_ORDER = "near-first"
_DEFAULT_LOG_LEVEL = "INFO"


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


def _parse_search_order(value: str | None) -> str:
    if value is None:
        return _DEFAULT_SEARCH_ORDER
    order = value.strip().lower()
    if order not in _SEARCH_ORDERS:
        raise ValueError(
            f"Unsupported search order '{order}'. Expected one of {_SEARCH_ORDERS}."
        )
    return order


def _parse_log_level(value: str | None) -> str:
    level = (value or _DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return level


@dataclass(frozen=True)
class RuntimeConfig:
    metric: str
    seed: int | None
    enable_diagnostics: bool
    log_level: str
    search_order: str

    @property
    def near_first(self) -> bool:
        return self.search_order == "near-first"

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        metric = os.getenv("VPTREEX_METRIC", _DEFAULT_METRIC).strip().lower() or _DEFAULT_METRIC
        seed = _parse_optional_int(os.getenv("VPTREEX_SEED"))
        enable_diagnostics = _bool_from_env(
            os.getenv("VPTREEX_ENABLE_DIAGNOSTICS"), default=True
        )
        log_level = _parse_log_level(os.getenv("VPTREEX_LOG_LEVEL"))
        search_order = _parse_search_order(os.getenv("VPTREEX_SEARCH_ORDER"))
        return cls(
            metric=metric,
            seed=seed,
            enable_diagnostics=enable_diagnostics,
            log_level=log_level,
            search_order=search_order,
        )

    def replace(self, **kwargs: Any) -> "RuntimeConfig":
        payload = {
            "metric": self.metric,
            "seed": self.seed,
            "enable_diagnostics": self.enable_diagnostics,
            "log_level": self.log_level,
            "search_order": self.search_order,
        }
        payload.update(kwargs)
        payload["metric"] = str(payload["metric"]).strip().lower()
        payload["log_level"] = _parse_log_level(payload["log_level"])
        payload["search_order"] = _parse_search_order(payload["search_order"])
        return RuntimeConfig(**payload)


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("vptreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)


@dataclass
class RuntimeContext:
    """Runtime configuration plus the one-off side effects it implies."""

    config: RuntimeConfig
    _activated: bool = False

    def activate(self) -> None:
        """Apply logging configuration once."""

        if self._activated:
            return
        _configure_logging(self.config.log_level)
        self._activated = True


_CONTEXT_CACHE: Optional[RuntimeContext] = None


def runtime_context() -> RuntimeContext:
    """Return the cached runtime context, constructing it if necessary."""

    global _CONTEXT_CACHE
    if _CONTEXT_CACHE is None:
        config = RuntimeConfig.from_env()
        context = RuntimeContext(config=config)
        context.activate()
        _CONTEXT_CACHE = context
    return _CONTEXT_CACHE


def current_runtime_context() -> RuntimeContext | None:
    return _CONTEXT_CACHE


def runtime_config() -> RuntimeConfig:
    return runtime_context().config


def configure_runtime(config: RuntimeConfig) -> RuntimeContext:
    """Force the active runtime context to use ``config`` instead of env defaults."""

    global _CONTEXT_CACHE
    context = RuntimeContext(config=config)
    context.activate()
    _CONTEXT_CACHE = context
    _LOGGER.debug("Runtime configured: %s", config)
    return context


def reset_runtime_context() -> None:
    """Clear the cached runtime context (used in tests)."""

    global _CONTEXT_CACHE
    _CONTEXT_CACHE = None


def reset_runtime_config_cache() -> None:
    reset_runtime_context()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "metric": config.metric,
        "seed": config.seed,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
        "search_order": config.search_order,
    }


__all__ = [
    "RuntimeConfig",
    "RuntimeContext",
    "runtime_context",
    "current_runtime_context",
    "runtime_config",
    "configure_runtime",
    "reset_runtime_context",
    "reset_runtime_config_cache",
    "describe_runtime",
]
