"""Observability: structured logging with credential redaction.

Provides standardized logging primitives using structlog.
"""
