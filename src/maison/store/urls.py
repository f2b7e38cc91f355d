"""Store URL configuration (mounted under the locale prefix)."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    path("cart/", views.CartView.as_view(), name="cart"),
    path("cart/add/", views.cart_add, name="cart-add"),
    path("cart/update/", views.cart_update, name="cart-update"),
    path("cart/remove/", views.cart_remove, name="cart-remove"),
    path("cart/clear-session/", views.cart_clear_session, name="cart-clear-session"),
    path("cart/checkout/", views.start_checkout, name="checkout"),
    path("wishlist/", views.WishlistView.as_view(), name="wishlist"),
    path("wishlist/toggle/", views.wishlist_toggle, name="wishlist-toggle"),
    path("wishlist/remove/", views.wishlist_remove, name="wishlist-remove"),
    path("account/addresses/", views.AddressBookView.as_view(), name="addresses"),
    path("account/addresses/new/", views.address_create, name="address-create"),
    path("account/addresses/<int:pk>/", views.address_update, name="address-update"),
    path("account/addresses/<int:pk>/delete/", views.address_delete, name="address-delete"),
    path("account/addresses/<int:pk>/default/", views.address_set_default, name="address-default"),
]
