"""FAQ schema proxy: structured-data FAQ extraction for web pages."""

__version__ = "0.1.0"
