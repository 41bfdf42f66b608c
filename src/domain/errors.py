from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a required amount or rate is missing or not a usable number."""
