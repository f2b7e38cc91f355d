"""Cache utilities for page data loaders.

Loaders that shape relational rows into view models are wrapped with
``cached_loader``. Results are stored in the default Django cache (Redis in
production) and grouped under tags so that back-office mutations can drop
every entry touching, say, the catalog with ``invalidate_tags("products")``.

Tags are versioned rather than enumerated: each tag owns a random token and
cache keys embed the tokens of their tags. Invalidating a tag rotates its
token, which orphans all keys built with the old one.

Usage:
    from maison.core.cache import CACHE_DURATIONS, CacheTags, cached_loader

    @cached_loader(["products", "overview"], timeout=1800, tags=[CacheTags.PRODUCTS])
    def get_products_overview(locale):
        ...
"""

import functools
import hashlib
import json
import logging
import uuid

from django.core.cache import cache

logger = logging.getLogger(__name__)

KEY_PREFIX = "ma"

# Cache duration presets (in seconds)
CACHE_DURATIONS = {
    "realtime": 60,
    "short": 300,
    "standard": 600,
    "long": 3600,
    "static": 86400,
}


class CacheTags:
    """Tags used for cache invalidation."""

    HOMEPAGE = "homepage"
    PRODUCTS = "products"
    COLLECTIONS = "collections"
    JOURNAL = "journal"
    CATEGORIES = "categories"
    SEARCH = "search"
    WISHLIST = "wishlist"


_MISSING = object()


def _tag_key(tag):
    return f"{KEY_PREFIX}:tag:{tag}"


def _tag_tokens(tags):
    """Current token for each tag, creating tokens for unseen tags."""
    if not tags:
        return []
    keys = [_tag_key(tag) for tag in tags]
    found = cache.get_many(keys)
    tokens = []
    for key in keys:
        token = found.get(key)
        if token is None:
            token = uuid.uuid4().hex
            # add() keeps a token another worker created concurrently
            if not cache.add(key, token, timeout=None):
                token = cache.get(key, token)
        tokens.append(token)
    return tokens


def build_cache_key(key_parts, args=(), tags=()):
    """Build the storage key for a loader call."""
    serialized = json.dumps([list(args), _tag_tokens(list(tags))], default=str, sort_keys=True)
    digest = hashlib.sha1(serialized.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:{':'.join(key_parts)}:{digest}"


def get_or_load(key_parts, args, loader, *, timeout=CACHE_DURATIONS["standard"], tags=()):
    """Return the cached result of ``loader(*args)``, loading it on a miss.

    A cache backend outage degrades to a direct load.
    """
    try:
        key = build_cache_key(key_parts, args, tags)
        cached = cache.get(key, _MISSING)
    except Exception:
        logger.warning("Cache unavailable for %s, loading directly", ":".join(key_parts), exc_info=True)
        return loader(*args)

    if cached is not _MISSING:
        return cached

    logger.debug("Cache miss for %s %r", ":".join(key_parts), args)
    result = loader(*args)

    try:
        cache.set(key, result, timeout=timeout)
    except Exception:
        logger.warning("Cache set failed for %s", ":".join(key_parts), exc_info=True)
    return result


def cached_loader(key_parts, *, timeout=CACHE_DURATIONS["standard"], tags=()):
    """Decorator caching a data loader under ``key_parts`` and ``tags``.

    The undecorated function stays reachable as ``wrapper.uncached``.
    """
    key_parts = list(key_parts)
    tags = list(tags)

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args):
            return get_or_load(key_parts, args, func, timeout=timeout, tags=tags)

        wrapper.uncached = func
        return wrapper

    return decorator


def invalidate_tags(*tags):
    """Drop every cached entry built under any of ``tags``."""
    for tag in tags:
        try:
            cache.set(_tag_key(tag), uuid.uuid4().hex, timeout=None)
        except Exception:
            logger.warning("Cache invalidation failed for tag %s", tag, exc_info=True)
        else:
            logger.debug("Invalidated cache tag %s", tag)


class RequestScopedLoader:
    """De-duplicates identical loads during a single page render.

    Two homepage modules pointing at the same collection share one query.
    """

    def __init__(self, loader):
        self.loader = loader
        self._results = {}

    def get(self, *args):
        if args not in self._results:
            self._results[args] = self.loader(*args)
        return self._results[args]

    def __len__(self):
        return len(self._results)
