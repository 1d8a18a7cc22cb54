"""Utility helpers for calckit."""

from .logging_config import reset_logging, setup_logging
from .numeric_matcher import is_finite_real, within_tolerance

__all__ = [
    "setup_logging",
    "reset_logging",
    "within_tolerance",
    "is_finite_real",
]
