from django.contrib import admin

from . import models


class EditorialPostTranslationInline(admin.TabularInline):
    model = models.EditorialPostTranslation
    extra = 0


class EditorialBlockInline(admin.TabularInline):
    model = models.EditorialBlock
    extra = 0


@admin.register(models.EditorialPost)
class EditorialPostAdmin(admin.ModelAdmin):
    list_display = ["slug", "category", "status", "published_at"]
    list_filter = ["category", "status"]
    inlines = [EditorialPostTranslationInline, EditorialBlockInline]


@admin.register(models.HomepageModule)
class HomepageModuleAdmin(admin.ModelAdmin):
    list_display = ["slug", "type", "locale", "sort_order", "active_from", "active_to"]
    list_filter = ["locale", "type"]
