"""Schema and operational tooling for the trade service database."""

__version__ = "0.1.0"
