"""sixdegrees — people/media relationship graph with path and neighborhood queries."""

__version__ = "0.1.0"
