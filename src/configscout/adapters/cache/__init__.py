"""Cache adapters."""

from configscout.adapters.cache.memory_cache import AsyncResultCache, ResultCache


__all__ = ["AsyncResultCache", "ResultCache"]
