"""
Cache module - Redis connection checks.
"""

from service_components.cache.redis_components import RedisComponents

__all__ = ["RedisComponents"]
