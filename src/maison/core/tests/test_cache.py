"""Tests for the tag-versioned loader cache."""

from unittest.mock import Mock

from maison.core.cache import (
    RequestScopedLoader,
    build_cache_key,
    cached_loader,
    get_or_load,
    invalidate_tags,
)


class TestCachedLoader:
    def test_second_call_is_served_from_cache(self):
        loader = Mock(return_value=["a"])
        cached = cached_loader(["things"], tags=["things"])(loader)

        assert cached("fr") == ["a"]
        assert cached("fr") == ["a"]
        assert loader.call_count == 1

    def test_arguments_are_part_of_the_key(self):
        loader = Mock(side_effect=lambda locale: locale.upper())
        cached = cached_loader(["things"], tags=["things"])(loader)

        assert cached("fr") == "FR"
        assert cached("en") == "EN"
        assert loader.call_count == 2

    def test_invalidating_a_tag_forces_a_reload(self):
        loader = Mock(return_value=1)
        cached = cached_loader(["things"], tags=["products"])(loader)

        cached("fr")
        invalidate_tags("products")
        cached("fr")

        assert loader.call_count == 2

    def test_unrelated_tag_keeps_entry(self):
        loader = Mock(return_value=1)
        cached = cached_loader(["things"], tags=["products"])(loader)

        cached("fr")
        invalidate_tags("journal")
        cached("fr")

        assert loader.call_count == 1

    def test_uncached_function_is_exposed(self):
        def load(locale):
            return locale

        cached = cached_loader(["things"])(load)

        assert cached.uncached is load


class TestGetOrLoad:
    def test_loads_on_miss(self):
        loader = Mock(return_value={"ok": True})

        assert get_or_load(["snapshot"], ("x",), loader, tags=["wishlist-user-1"]) == {"ok": True}
        loader.assert_called_once_with("x")

    def test_cache_outage_degrades_to_direct_load(self, monkeypatch):
        from maison.core import cache as cache_module

        broken = Mock()
        broken.get.side_effect = ConnectionError("redis down")
        broken.get_many.side_effect = ConnectionError("redis down")
        monkeypatch.setattr(cache_module, "cache", broken)
        loader = Mock(return_value=3)

        assert get_or_load(["numbers"], (), loader) == 3
        assert get_or_load(["numbers"], (), loader) == 3
        assert loader.call_count == 2


class TestBuildCacheKey:
    def test_key_changes_after_invalidation(self):
        before = build_cache_key(["products"], ("fr",), ["products"])
        invalidate_tags("products")
        after = build_cache_key(["products"], ("fr",), ["products"])

        assert before != after
        assert before.startswith("ma:products:")


class TestRequestScopedLoader:
    def test_identical_loads_run_once(self):
        loader = Mock(side_effect=lambda slug: {"slug": slug})
        scoped = RequestScopedLoader(loader)

        first = scoped.get("nocturne")
        second = scoped.get("nocturne")
        scoped.get("aurore")

        assert first is second
        assert loader.call_count == 2
        assert len(scoped) == 2
