"""Asset deployment, loading support and HTML page tooling for static 3D sites."""

__version__ = "0.1.0"