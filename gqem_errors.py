"""
Error types raised by the GQEM model.

All of them are caller contract violations and subclass ValueError, so code
that already guards model calls with `except ValueError` keeps working.
"""

from __future__ import annotations


class GQEMError(ValueError):
    """Base class for GQEM input errors."""


class InvalidParameter(GQEMError):
    """A model angle is NaN, infinite, or not a real number."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a finite real angle in radians, got {value!r}")


class ShapeMismatch(GQEMError):
    """Count data and trial counts do not share the 4x3 prediction shape."""


class DomainError(GQEMError):
    """A count lies outside [0, n] or is not an integer."""
