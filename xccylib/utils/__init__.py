from .rootfinding import RootResult, bisect, expand_bracket

__all__ = ["RootResult", "bisect", "expand_bracket"]
