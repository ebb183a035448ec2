"""RGB image preprocessing: mirror borders, neighbourhood filters, JSON-configured pipelines and tiled runs."""

__version__ = "1.0.0"

__all__ = ["__version__"]