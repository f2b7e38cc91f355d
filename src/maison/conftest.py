"""Shared pytest fixtures for the Maison Aurèle apps."""

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from maison.catalog.models import (
    Category,
    CategoryTranslation,
    Collection,
    CollectionItem,
    CollectionTranslation,
    MediaAsset,
    Product,
    ProductMedia,
    ProductTranslation,
    ProductVariant,
)
from maison.core.models import Locale, PublicationStatus, UserRole

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    """Every test starts with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def customer(db):
    """Create a customer account."""
    return User.objects.create_user(
        email="claire@example.com",
        password="testpass123",
        first_name="Claire",
        last_name="Dumas",
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(email="marc@example.com", password="testpass123")


@pytest.fixture
def editor(db):
    """Create a back-office editor."""
    return User.objects.create_user(
        email="editor@maison-aurele.com",
        password="testpass123",
        role=UserRole.EDITOR,
    )


@pytest.fixture
def category(db):
    group = Category.objects.create(slug="women")
    CategoryTranslation.objects.create(category=group, locale=Locale.FR, title="Femme")
    CategoryTranslation.objects.create(category=group, locale=Locale.EN, title="Women")
    child = Category.objects.create(slug="women-dresses", parent=group)
    CategoryTranslation.objects.create(category=child, locale=Locale.FR, title="Robes")
    CategoryTranslation.objects.create(category=child, locale=Locale.EN, title="Dresses")
    return child


@pytest.fixture
def product(db, category):
    """An active bilingual product with a hero image and two variants."""
    product = Product.objects.create(
        slug="robe-nocturne",
        status=PublicationStatus.ACTIVE,
        category=category,
        limited_edition=True,
    )
    ProductTranslation.objects.create(
        product=product, locale=Locale.FR, name="Robe Nocturne", description="Soie noire"
    )
    ProductTranslation.objects.create(
        product=product, locale=Locale.EN, name="Nocturne Dress", description="Black silk"
    )
    gallery = MediaAsset.objects.create(url="https://cdn.example.com/nocturne-gallery.jpg")
    hero = MediaAsset.objects.create(url="https://cdn.example.com/nocturne-hero.jpg")
    ProductMedia.objects.create(product=product, asset=gallery, placement="gallery", sort_order=0)
    ProductMedia.objects.create(product=product, asset=hero, placement="hero", sort_order=1)
    ProductVariant.objects.create(product=product, sku="RN-38", size="38", color="Noir", price_cents=420000)
    ProductVariant.objects.create(product=product, sku="RN-40", size="40", color="Noir", price_cents=450000)
    return product


@pytest.fixture
def variant(product):
    return product.variants.get(sku="RN-38")


@pytest.fixture
def second_product(db, category):
    product = Product.objects.create(slug="foulard-soie", status=PublicationStatus.ACTIVE, category=category)
    ProductTranslation.objects.create(product=product, locale=Locale.FR, name="Foulard Soie")
    ProductTranslation.objects.create(product=product, locale=Locale.EN, name="Silk Scarf")
    ProductVariant.objects.create(product=product, sku="FS-UNI", price_cents=38000)
    return product


@pytest.fixture
def second_variant(second_product):
    return second_product.variants.get()


@pytest.fixture
def collection(db, product):
    collection = Collection.objects.create(slug="nocturne", status=PublicationStatus.ACTIVE)
    CollectionTranslation.objects.create(collection=collection, locale=Locale.FR, title="Nocturne FR")
    CollectionTranslation.objects.create(collection=collection, locale=Locale.EN, title="Nocturne EN")
    CollectionItem.objects.create(collection=collection, product=product, sort_order=1)
    return collection
