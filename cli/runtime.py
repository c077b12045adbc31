from __future__ import annotations

from typing import Any, Mapping

from vptreex.api import Runtime as ApiRuntime


def _get_arg(source: Any, name: str, default: Any = None) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, default)
    return getattr(source, name, default)


def runtime_from_args(
    args: Any,
    *,
    default_metric: str = "euclidean",
    extra_overrides: Mapping[str, Any] | None = None,
) -> ApiRuntime:
    metric = _get_arg(args, "metric", default_metric) or default_metric
    runtime_kwargs: dict[str, Any] = {"metric": str(metric).lower()}
    seed = _get_arg(args, "seed")
    if seed is not None:
        runtime_kwargs["seed"] = int(seed)
    diagnostics = _get_arg(args, "diagnostics")
    if diagnostics is not None:
        runtime_kwargs["diagnostics"] = bool(diagnostics)
    log_level = _get_arg(args, "log_level")
    if log_level:
        runtime_kwargs["log_level"] = log_level
    search_order = _get_arg(args, "search_order")
    if search_order:
        runtime_kwargs["search_order"] = search_order
    if extra_overrides:
        runtime_kwargs.update(extra_overrides)
    return ApiRuntime(**runtime_kwargs)


__all__ = ["runtime_from_args"]
