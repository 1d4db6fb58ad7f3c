"""fitlog: personal workout log with a local JSON store."""

__version__ = "0.1.0"
