"""
mandihub.observability

Structured logging configuration and request context propagation.
"""
