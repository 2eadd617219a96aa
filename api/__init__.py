"""
FastAPI RESTful API for the library catalog service.

This module provides a REST API for:
- Listing and fetching book records
- Creating, replacing and deleting book records
- Uniform JSON error reporting
"""
