"""
Resources

Teaching resource library and its object storage.
"""

from .storage import StorageService, get_storage_service

__all__ = ["StorageService", "get_storage_service"]
