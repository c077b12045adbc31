from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from vptreex import config as vx_config


@dataclass(frozen=True)
class ResourceSnapshot:
    wall: float
    cpu_user: float | None
    cpu_system: float | None
    rss: int | None

    @classmethod
    def capture(cls, process: psutil.Process | None) -> "ResourceSnapshot":
        wall = time.perf_counter()
        if process is None:
            return cls(wall=wall, cpu_user=None, cpu_system=None, rss=None)
        cpu = process.cpu_times()
        rss = process.memory_info().rss
        return cls(wall=wall, cpu_user=cpu.user, cpu_system=cpu.system, rss=int(rss))


def _format_ms(start: float | None, end: float | None) -> str:
    if start is None or end is None:
        return "NA"
    return f"{(end - start) * 1e3:.3f}"


def _format_bytes(start: int | None, end: int | None) -> str:
    if start is None or end is None:
        return "NA"
    return str(end - start)


@dataclass
class OperationLog:
    """Collects metadata for a single logged operation."""

    op: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, **fields: Any) -> None:
        self.metadata.update(fields)

    def render(self, start: ResourceSnapshot, end: ResourceSnapshot) -> str:
        parts = [
            f"op={self.op}",
            f"wall_ms={(end.wall - start.wall) * 1e3:.3f}",
            f"cpu_user_ms={_format_ms(start.cpu_user, end.cpu_user)}",
            f"cpu_system_ms={_format_ms(start.cpu_system, end.cpu_system)}",
            f"rss_delta={_format_bytes(start.rss, end.rss)}",
        ]
        parts.extend(f"{key}={value}" for key, value in self.metadata.items())
        return " ".join(parts)


@contextmanager
def log_operation(logger: logging.Logger, op: str) -> Iterator[OperationLog]:
    """Time ``op`` and emit a single INFO record when the block exits.

    Resource usage (CPU time, RSS) is sampled through ``psutil`` only when
    diagnostics are enabled in the runtime configuration; otherwise those
    fields are reported as ``NA``.
    """

    runtime = vx_config.runtime_config()
    process = psutil.Process() if runtime.enable_diagnostics else None
    op_log = OperationLog(op=op)
    start = ResourceSnapshot.capture(process)
    try:
        yield op_log
    finally:
        end = ResourceSnapshot.capture(process)
        logger.info(op_log.render(start, end))


__all__ = ["OperationLog", "ResourceSnapshot", "log_operation"]
