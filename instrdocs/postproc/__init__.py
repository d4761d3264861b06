"""Post-processing of target documents."""

from .markers import MarkerManager

__all__ = ["MarkerManager"]
