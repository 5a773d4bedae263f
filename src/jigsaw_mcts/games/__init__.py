"""Environments that plug into the search engine."""

from .jigsaw import Jigsaw, ALL_FIGURES, SKIP_ACTION

__all__ = ["Jigsaw", "ALL_FIGURES", "SKIP_ACTION"]
