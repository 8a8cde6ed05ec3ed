"""SwiftBank access control and session security."""

__version__ = "0.1.0"
