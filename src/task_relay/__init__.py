"""Relay inbound HTTP requests to a long-running task runner and serve its rendered result."""

__version__ = "0.1.0"
