"""Service layer: traversal engine and the propagate operation."""
