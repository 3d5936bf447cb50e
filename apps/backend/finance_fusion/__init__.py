"""Finance Fusion backend: relational model and REST API for plan-based personal finance."""

__version__ = "0.1.0"
