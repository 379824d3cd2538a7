"""Repository implementations."""

from .box_catalog_repository import BoxCatalogRepository
from .packing_cache_repository import PackingCacheRepository

__all__ = ["BoxCatalogRepository", "PackingCacheRepository"]
