"""Public ergonomic façade for vptreex."""

from .runtime import Runtime
from .vpt import VPT

__all__ = [
    "Runtime",
    "VPT",
]
