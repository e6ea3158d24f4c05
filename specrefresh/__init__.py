"""Refresh a Kiota-generated API client from its published OpenAPI document."""

__version__ = "0.1.0"
