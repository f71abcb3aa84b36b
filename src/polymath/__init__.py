"""PolyMath - CORS proxy and outcome normalizer for Polymarket events."""

__version__ = "0.1.0"
