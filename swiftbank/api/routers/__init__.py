"""API routers for SwiftBank."""

from . import access

__all__ = [
    "access",
]
