from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict

from vptreex import config as vx_config


_ATTR_TO_FIELD = {
    "metric": "metric",
    "seed": "seed",
    "diagnostics": "enable_diagnostics",
    "log_level": "log_level",
    "search_order": "search_order",
}


def _active_runtime_config() -> vx_config.RuntimeConfig:
    active = vx_config.current_runtime_context()
    if active is not None:
        return active.config
    return vx_config.RuntimeConfig.from_env()


@dataclass(frozen=True)
class Runtime:
    """Declarative runtime configuration that can activate a vptreex context.

    Fields left as ``None`` inherit from the active context, or from the
    environment when no context has been installed yet.
    """

    metric: str | None = None
    seed: int | None = None
    diagnostics: bool | None = None
    log_level: str | None = None
    search_order: str | None = None

    def to_config(self, base: vx_config.RuntimeConfig | None = None) -> vx_config.RuntimeConfig:
        base_config = base or _active_runtime_config()
        overrides: Dict[str, Any] = {}
        for attr, field_name in _ATTR_TO_FIELD.items():
            value = getattr(self, attr)
            if value is not None:
                overrides[field_name] = value
        if not overrides:
            return base_config
        return base_config.replace(**overrides)

    def activate(self) -> vx_config.RuntimeContext:
        """Install this runtime as the active global context and return it."""

        config = self.to_config()
        return vx_config.configure_runtime(config)

    def describe(self) -> Dict[str, Any]:
        config = self.to_config()
        return {
            "metric": config.metric,
            "seed": config.seed,
            "enable_diagnostics": config.enable_diagnostics,
            "log_level": config.log_level,
            "search_order": config.search_order,
        }

    def with_updates(self, **kwargs: Any) -> "Runtime":
        return replace(self, **kwargs)

    @classmethod
    def from_active(cls) -> "Runtime":
        return cls.from_config(_active_runtime_config())

    @classmethod
    def from_config(cls, config: vx_config.RuntimeConfig) -> "Runtime":
        return cls(
            metric=config.metric,
            seed=config.seed,
            diagnostics=config.enable_diagnostics,
            log_level=config.log_level,
            search_order=config.search_order,
        )


__all__ = ["Runtime"]
