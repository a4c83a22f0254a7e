"""Python client for the travel booking REST API."""

__version__ = "1.0.0"
