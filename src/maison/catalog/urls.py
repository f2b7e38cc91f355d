"""Catalog URL configuration (mounted under the locale prefix)."""

from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("shop/", views.ShopView.as_view(), name="shop"),
    path("products/", views.ProductListView.as_view(), name="product-list"),
    path("products/<slug:slug>/", views.ProductDetailView.as_view(), name="product-detail"),
    path("collections/", views.CollectionListView.as_view(), name="collection-list"),
    path("collections/<slug:slug>/", views.CollectionDetailView.as_view(), name="collection-detail"),
    path("search/", views.SearchView.as_view(), name="search"),
    path("api/search/", views.search_api, name="search-api"),
]
