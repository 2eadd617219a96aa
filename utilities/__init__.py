"""
Shared utilities: configuration and structured logging.
"""
