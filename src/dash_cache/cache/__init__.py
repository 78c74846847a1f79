from .manager import API_PREFIX, PAGE_PREFIX, ROUTE_PREFIX, CacheEntry, CacheManager

__all__ = ["CacheManager", "CacheEntry", "PAGE_PREFIX", "API_PREFIX", "ROUTE_PREFIX"]
