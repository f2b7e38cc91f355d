from django.contrib import admin

from . import models


class ProductTranslationInline(admin.TabularInline):
    model = models.ProductTranslation
    extra = 0


class ProductVariantInline(admin.TabularInline):
    model = models.ProductVariant
    extra = 0


@admin.register(models.Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["slug", "status", "limited_edition", "category", "updated_at"]
    list_filter = ["status", "limited_edition"]
    search_fields = ["slug", "translations__name"]
    inlines = [ProductTranslationInline, ProductVariantInline]


class CollectionTranslationInline(admin.TabularInline):
    model = models.CollectionTranslation
    extra = 0


@admin.register(models.Collection)
class CollectionAdmin(admin.ModelAdmin):
    list_display = ["slug", "status", "release_date"]
    inlines = [CollectionTranslationInline]


@admin.register(models.LimitedDrop)
class LimitedDropAdmin(admin.ModelAdmin):
    list_display = ["title", "collection", "starts_at", "ends_at", "waitlist_open"]


admin.site.register(models.Category)
admin.site.register(models.MediaAsset)
admin.site.register(models.Material)
