"""Fixtures for editorial tests."""

import pytest
from django.utils import timezone

from maison.catalog.models import (
    CollectionSection,
    CollectionSectionTranslation,
    LookbookSlide,
    LookbookSlideTranslation,
    MediaAsset,
)
from maison.core.models import Locale, PublicationStatus
from maison.editorial.models import (
    EditorialBlock,
    EditorialBlockTranslation,
    EditorialFeature,
    EditorialPost,
    EditorialPostTranslation,
    HomepageModule,
    HomepageModuleType,
)

HOMEPAGE_CONFIGS = {
    HomepageModuleType.HERO_SCENE: {"pretitle": "Chapitre I", "title_lines": ["Maison Aurèle"]},
    HomepageModuleType.ARTISAN_MARQUEE: {"items": ["Faubourg Saint-Honoré", "Dentelle de Calais"]},
    HomepageModuleType.GALLERY_SCROLL_SCENE: {"heading": "Galerie Vivante", "artworks": []},
    HomepageModuleType.STORY_PANELS: {"heading": "Narratifs", "collection_slug": "nocturne", "limit": 1},
    HomepageModuleType.ATELIER_DIPTYCH: {"title": "Diptyque", "bullets": ["Paris"]},
    HomepageModuleType.LOOKBOOK_CAROUSEL: {"title": "Capsule", "collection_slug": "nocturne"},
    HomepageModuleType.SCULPTED_QUOTES: {"quotes": ["La maison écrit en lumière."]},
    HomepageModuleType.EDITORIAL_TEASER: {"post_slug": "atelier-nuit", "cta_label": "Lire", "cta_href": "/journal"},
    HomepageModuleType.MAISON_TIMELINE: {"entries": [{"year": "1962", "title": "Atelier", "body": "Paris"}]},
    HomepageModuleType.LIMITED_DROP_BANNER: {"title": "Drop limité", "body": "Liste d'attente"},
}


@pytest.fixture
def journal_post(db, product):
    """A published bilingual journal post with a block and a featured product."""
    hero = MediaAsset.objects.create(url="https://cdn.example.com/atelier-nuit.jpg")
    post = EditorialPost.objects.create(
        slug="atelier-nuit",
        category="ATELIER",
        status=PublicationStatus.ACTIVE,
        published_at=timezone.now(),
        hero_asset=hero,
    )
    EditorialPostTranslation.objects.create(
        post=post,
        locale=Locale.FR,
        title="L'atelier la nuit",
        standfirst="Une nuit rue Saint-Honoré",
        body_rich_text=[
            {"type": "paragraph", "children": [{"text": "Premier "}, {"text": "paragraphe"}]},
            {"type": "paragraph", "children": []},
            {"type": "paragraph", "children": [{"text": "Second"}]},
        ],
    )
    EditorialPostTranslation.objects.create(post=post, locale=Locale.EN, title="The atelier at night")
    block = EditorialBlock.objects.create(post=post, type="story", sort_order=1)
    EditorialBlockTranslation.objects.create(block=block, locale=Locale.FR, headline="Les mains", body="Couture")
    EditorialFeature.objects.create(post=post, product=product, sort_order=1)
    return post


@pytest.fixture
def narrative(collection):
    """Sections and lookbook slides on the Nocturne collection."""
    for index in range(2):
        asset = MediaAsset.objects.create(url=f"https://cdn.example.com/section-{index}.jpg")
        section = CollectionSection.objects.create(collection=collection, sort_order=index, asset=asset)
        CollectionSectionTranslation.objects.create(
            section=section, locale=Locale.FR, heading=f"Chapitre {index}", caption="Drop"
        )
    slide_asset = MediaAsset.objects.create(url="https://cdn.example.com/look-01.jpg")
    slide = LookbookSlide.objects.create(collection=collection, asset=slide_asset)
    LookbookSlideTranslation.objects.create(slide=slide, locale=Locale.FR, title="Look 01", body="Noir")
    return collection


@pytest.fixture
def homepage_modules(db):
    """All ten homepage modules for French."""
    modules = []
    for sort_order, (module_type, config) in enumerate(HOMEPAGE_CONFIGS.items()):
        modules.append(
            HomepageModule.objects.create(
                slug=module_type.replace("_", "-"),
                type=module_type,
                locale=Locale.FR,
                sort_order=sort_order * 10,
                config=config,
            )
        )
    return modules
