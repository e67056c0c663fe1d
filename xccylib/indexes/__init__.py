from .ibor import IborIndex

__all__ = ["IborIndex"]
