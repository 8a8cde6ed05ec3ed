"""HTTP layer for SwiftBank access control."""
