from .redis_client import BaseFeatureStore, RedisFeatureStore, make_key

__all__ = ["BaseFeatureStore", "RedisFeatureStore", "make_key"]
