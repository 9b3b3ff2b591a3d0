"""
ShowSearch Services Module

Provides the server-side services:
- SearchProxy: cache-aside layer in front of the TVMaze search API
"""

from .search_proxy import SearchProxy, ProxyResult, CACHE_HIT, CACHE_MISS, make_cache_key

__all__ = ['SearchProxy', 'ProxyResult', 'CACHE_HIT', 'CACHE_MISS', 'make_cache_key']
