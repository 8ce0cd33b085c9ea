"""Filesystem-facing collaborators: manifest I/O and target resolution."""
