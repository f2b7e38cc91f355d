"""Catalog views: product listing, product pages, collections, shop and search."""

from dataclasses import asdict

from django.http import Http404, JsonResponse
from django.views.generic import TemplateView

from maison.core.i18n import get_request_locale

from . import data

SEARCH_API_LIMIT = 8


class LocalizedTemplateView(TemplateView):
    """Template view that knows the storefront locale of the request."""

    def get_locale(self):
        return get_request_locale(self.request)


class ProductListView(LocalizedTemplateView):
    template_name = "catalog/product_list.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["products"] = data.get_products_overview(self.get_locale())
        return context


class ProductDetailView(LocalizedTemplateView):
    template_name = "catalog/product_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        product = data.get_product_detail(self.get_locale(), self.kwargs["slug"])
        if product is None:
            raise Http404("Product not found")
        context["product"] = product
        return context


class CollectionListView(LocalizedTemplateView):
    template_name = "catalog/collection_list.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["collections"] = data.get_collections_overview(self.get_locale())
        return context


class CollectionDetailView(LocalizedTemplateView):
    template_name = "catalog/collection_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        collection = data.get_collection_detail(self.get_locale(), self.kwargs["slug"])
        if collection is None:
            raise Http404("Collection not found")
        context["collection"] = collection
        return context


class ShopView(LocalizedTemplateView):
    template_name = "catalog/shop.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["shop"] = data.get_shop_data(self.get_locale())
        return context


class SearchView(LocalizedTemplateView):
    template_name = "catalog/search.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = self.request.GET.get("q", "")
        context["query"] = query
        context["results"] = data.search_products(query, self.get_locale(), limit=24)
        return context


def search_api(request):
    """JSON search used by the header search overlay."""
    query = request.GET.get("q", "")
    results = data.search_products(query, get_request_locale(request), limit=SEARCH_API_LIMIT)
    return JsonResponse({"results": [asdict(result) for result in results]})
