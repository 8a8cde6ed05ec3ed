"""Core services for SwiftBank."""
