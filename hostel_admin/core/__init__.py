"""Core utilities: logging, exceptions, middleware."""
