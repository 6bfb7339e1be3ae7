"""Bank statement import: format detection, parsing and failure reporting."""

__version__ = "0.1.0"
