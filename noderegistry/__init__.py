"""Node Registry — versioned lookup of pluggable node types."""

__version__ = "0.1.0"
