# Initial editorial schema: journal posts and homepage modules

import django.db.models.deletion
from django.db import migrations, models

LOCALE_CHOICES = [("fr", "Français"), ("en", "English")]
STATUS_CHOICES = [("DRAFT", "Draft"), ("ACTIVE", "Active"), ("ARCHIVED", "Archived")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="EditorialPost",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("slug", models.SlugField(unique=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("JOURNAL", "Journal"),
                            ("CAMPAIGN", "Campaign"),
                            ("ATELIER", "Atelier"),
                            ("INTERVIEW", "Interview"),
                        ],
                        default="JOURNAL",
                        max_length=20,
                    ),
                ),
                ("status", models.CharField(choices=STATUS_CHOICES, default="DRAFT", max_length=10)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                (
                    "hero_asset",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="catalog.mediaasset",
                    ),
                ),
            ],
            options={
                "ordering": ["-published_at"],
            },
        ),
        migrations.CreateModel(
            name="EditorialPostTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("title", models.CharField(max_length=255)),
                ("standfirst", models.TextField(blank=True, null=True)),
                ("body_rich_text", models.JSONField(blank=True, null=True)),
                (
                    "post",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="editorial.editorialpost",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("post", "locale"), name="uniq_post_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="EditorialBlock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(default="story", max_length=30)),
                ("data", models.JSONField(blank=True, null=True)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "asset",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="catalog.mediaasset",
                    ),
                ),
                (
                    "post",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocks",
                        to="editorial.editorialpost",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="EditorialBlockTranslation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("headline", models.CharField(blank=True, max_length=255, null=True)),
                ("body", models.TextField(blank=True, null=True)),
                ("caption", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "block",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="translations",
                        to="editorial.editorialblock",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("block", "locale"), name="uniq_block_translation_locale"),
                ],
            },
        ),
        migrations.CreateModel(
            name="EditorialFeature",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sort_order", models.PositiveIntegerField(default=0)),
                (
                    "post",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="featured_products",
                        to="editorial.editorialpost",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="HomepageModule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("slug", models.SlugField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("hero_scene", "Hero scene"),
                            ("artisan_marquee", "Artisan marquee"),
                            ("gallery_scroll_scene", "Gallery scroll scene"),
                            ("story_panels", "Story panels"),
                            ("atelier_diptych", "Atelier diptych"),
                            ("lookbook_carousel", "Lookbook carousel"),
                            ("sculpted_quotes", "Sculpted quotes"),
                            ("editorial_teaser", "Editorial teaser"),
                            ("maison_timeline", "Maison timeline"),
                            ("limited_drop_banner", "Limited drop banner"),
                        ],
                        max_length=40,
                    ),
                ),
                ("locale", models.CharField(choices=LOCALE_CHOICES, max_length=2)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("config", models.JSONField(default=dict)),
                ("active_from", models.DateTimeField(blank=True, null=True)),
                ("active_to", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["sort_order", "id"],
                "constraints": [
                    models.UniqueConstraint(fields=("slug", "locale"), name="uniq_homepage_module_slug_locale"),
                ],
            },
        ),
    ]
