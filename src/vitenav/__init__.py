"""Generate VitePress site configuration from a single nav source."""

__version__ = "0.1.0"
