# shiftroster/errors.py
from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when a solve snapshot is structurally inconsistent."""


class InvalidMonth(InvalidInput):
    """Raised for malformed month identifiers."""
