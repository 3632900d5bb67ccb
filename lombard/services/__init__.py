"""
Use cases of the registry.

Routers call ClientService instead of talking to a repository directly.
"""

from .client_service import ClientService, SORT_FIELDS

__all__ = ["ClientService", "SORT_FIELDS"]
