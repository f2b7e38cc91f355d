"""Tests for the catalog data loaders."""

from datetime import timedelta

import pytest
from django.utils import timezone

from maison.catalog import data
from maison.catalog.models import (
    Category,
    Collection,
    Inventory,
    LimitedDrop,
    Product,
    ProductTranslation,
)
from maison.core.cache import CacheTags, invalidate_tags
from maison.core.models import Locale, PublicationStatus


@pytest.mark.django_db
class TestProductsOverview:
    def test_cards_are_localized(self, product, collection):
        [card] = data.load_products_overview("fr")

        assert card.name == "Robe Nocturne"
        assert card.description == "Soie noire"
        assert card.hero_image == "https://cdn.example.com/nocturne-hero.jpg"
        assert card.price_cents == 420000
        assert card.default_variant_id == product.variants.get(sku="RN-38").pk
        assert card.sizes == ["38", "40"]
        assert card.colors == ["Noir"]
        assert card.collections[0].title == "Nocturne FR"
        assert card.category.title == "Robes"
        assert card.category_group.title == "Femme"

    def test_drafts_are_hidden(self, product):
        Product.objects.create(slug="brouillon")

        slugs = [card.slug for card in data.load_products_overview("en")]

        assert slugs == ["robe-nocturne"]

    def test_missing_translation_falls_back_to_slug(self, product):
        ProductTranslation.objects.filter(product=product, locale=Locale.EN).delete()

        [card] = data.load_products_overview("en")

        assert card.name == "robe-nocturne"

    def test_cached_until_products_tag_invalidated(self, product):
        assert len(data.get_products_overview("fr")) == 1
        Product.objects.create(slug="nouveau", status=PublicationStatus.ACTIVE)

        assert len(data.get_products_overview("fr")) == 1

        invalidate_tags(CacheTags.PRODUCTS)
        assert len(data.get_products_overview("fr")) == 2


@pytest.mark.django_db
class TestProductDetail:
    def test_detail_with_collection_and_availability(self, product, collection, variant):
        Inventory.objects.create(variant=variant, quantity=3)

        detail = data.load_product_detail("en", "robe-nocturne")

        assert detail.name == "Nocturne Dress"
        assert [v.sku for v in detail.variants] == ["RN-38", "RN-40"]
        assert detail.variants[0].availability == 3
        assert detail.variants[1].availability is None
        assert detail.collection.title == "Nocturne EN"
        assert detail.collection.products[0].slug == "robe-nocturne"
        assert len(detail.gallery) == 2

    def test_unknown_slug(self, db):
        assert data.load_product_detail("fr", "nope") is None


@pytest.mark.django_db
class TestCollections:
    def test_overview_counts_products_and_drop(self, collection):
        LimitedDrop.objects.create(collection=collection, title="Nuit", starts_at=timezone.now())

        [card] = data.load_collections_overview("en")

        assert card.title == "Nocturne EN"
        assert card.product_count == 1
        assert card.drop_window.title == "Nuit"

    def test_release_date_orders_newest_first_and_undated_last(self, collection):
        collection.release_date = timezone.now() - timedelta(days=30)
        collection.save()
        Collection.objects.create(slug="aurore", release_date=timezone.now())
        Collection.objects.create(slug="sans-date")

        slugs = [card.slug for card in data.load_collections_overview("fr")]

        assert slugs == ["aurore", "nocturne", "sans-date"]

    def test_detail(self, collection):
        detail = data.load_collection_detail("fr", "nocturne")

        assert detail.title == "Nocturne FR"
        assert [p.name for p in detail.products] == ["Robe Nocturne"]
        assert detail.products[0].price_cents == 420000

    def test_detail_unknown(self, db):
        assert data.load_collection_detail("fr", "nope") is None


@pytest.mark.django_db
class TestShopData:
    def test_groups_use_newest_product_images(self, product):
        shop = data.load_shop_data("en")

        [group] = shop.groups
        assert group.title == "Women"
        [category] = group.categories
        assert category.title == "Dresses"
        assert category.hero_image == "https://cdn.example.com/nocturne-hero.jpg"
        assert category.secondary_image == "https://cdn.example.com/nocturne-gallery.jpg"

    def test_fallback_image_for_empty_category(self, db):
        group = Category.objects.create(slug="accessories")
        Category.objects.create(slug="jewelry", parent=group)

        shop = data.load_shop_data("fr")

        assert shop.groups[0].categories[0].hero_image == data.CATEGORY_FALLBACK_IMAGES["jewelry"]

    def test_groups_without_children_are_skipped(self, db):
        Category.objects.create(slug="empty-group")

        assert data.load_shop_data("fr").groups == []


class TestQuickCategories:
    def _category(self, pk, slug):
        return data.ShopCategory(
            id=pk, slug=slug, title=slug, description=None, hero_image=None, secondary_image=None
        )

    def test_women_and_men_first(self):
        group = data.ShopCategoryGroup(
            id=1,
            slug="all",
            title="All",
            description=None,
            categories=[
                self._category(1, "bags"),
                self._category(2, "women-dresses"),
                self._category(3, "men-shirts"),
                self._category(4, "scarves"),
                self._category(5, "jewelry"),
            ],
        )

        selected = data.select_quick_categories([group])

        assert [c.slug for c in selected] == ["women-dresses", "men-shirts", "bags", "scarves"]

    def test_empty(self):
        assert data.select_quick_categories([]) == []


@pytest.mark.django_db
class TestSearch:
    def test_matches_translated_name(self, product):
        results = data.search_products("nocturne", "en")

        assert [r.slug for r in results] == ["robe-nocturne"]
        assert results[0].category == "Dresses"

    def test_matches_category_title(self, product):
        assert [r.slug for r in data.search_products("robes", "fr")] == ["robe-nocturne"]

    def test_locale_scoped(self, product):
        assert data.search_products("dress", "fr") == []

    def test_blank_query(self, product):
        assert data.search_products("   ", "fr") == []

    def test_drafts_excluded(self, product):
        product.status = PublicationStatus.DRAFT
        product.save()

        assert data.search_products("nocturne", "fr") == []


@pytest.mark.django_db
class TestCatalogViews:
    def test_product_detail_page(self, client, product):
        response = client.get("/fr/products/robe-nocturne/")

        assert response.status_code == 200
        assert "Robe Nocturne" in response.content.decode()

    def test_product_detail_404(self, client, db):
        assert client.get("/en/products/nope/").status_code == 404

    def test_search_api(self, client, product):
        response = client.get("/en/api/search/", {"q": "silk"})

        assert response.status_code == 200
        assert response.json()["results"][0]["slug"] == "robe-nocturne"

    def test_shop_page(self, client, product):
        response = client.get("/en/shop/")

        assert response.status_code == 200
        assert "Dresses" in response.content.decode()
