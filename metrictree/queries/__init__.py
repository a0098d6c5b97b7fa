from .nearest import NearestResult, nearest

__all__ = ["NearestResult", "nearest"]
