from .build import build_tree, construct

__all__ = ["build_tree", "construct"]
