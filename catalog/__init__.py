"""
Catalog package for the library book service.

This package contains:
- Book record model and wire/document mapping
- Identifier codec for ObjectId-backed book IDs
- Book validation rules
- MongoDB repository for the books collection
"""

__version__ = "1.0.0"
