"""bumpctl — propagate a release version across a Cargo workspace."""

__version__ = "0.1.0"
