from .knn import knn, nearest_neighbor, search

__all__ = ["knn", "nearest_neighbor", "search"]
