from django.contrib import admin

from . import models


class OrderItemInline(admin.TabularInline):
    model = models.OrderItem
    extra = 0
    readonly_fields = ["variant", "product_name", "locale", "unit_price_cents", "quantity"]


class PaymentRecordInline(admin.TabularInline):
    model = models.PaymentRecord
    extra = 0
    readonly_fields = ["provider", "provider_id", "amount_cents", "currency", "status", "created_at"]


@admin.register(models.Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["number", "user", "status", "payment_status", "fulfillment_status", "total_cents", "placed_at"]
    list_filter = ["status", "payment_status", "fulfillment_status"]
    search_fields = ["number", "user__email"]
    inlines = [OrderItemInline, PaymentRecordInline]


@admin.register(models.Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ["code", "discount_type", "discount_value", "starts_at", "ends_at", "usage_limit"]


@admin.register(models.Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ["boutique", "appointment_at", "status", "concierge"]
    list_filter = ["status", "boutique"]


admin.site.register(models.Address)
admin.site.register(models.Cart)
