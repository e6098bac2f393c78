"""Synchronous Discord REST API client with rate limiting, payload checks and webhooks."""

__version__ = "0.1.0"