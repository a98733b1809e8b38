"""Service layer: user directory and follow graph operations."""
