from . import generate

__all__ = ["generate"]
