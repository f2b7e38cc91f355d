"""Back-office views.

Read pages render the rows from ``data``; actions are POST-only and redirect
back to the page they were submitted from. Every view requires a back-office
role.
"""

import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse
from django.views import View
from django.views.generic import TemplateView

from maison.catalog.models import Collection
from maison.core.mixins import BackofficeRequiredMixin
from maison.store.models import FulfillmentStatus, OrderStatus, PaymentStatus

from . import data, services

logger = logging.getLogger(__name__)


class BackofficePageView(BackofficeRequiredMixin, TemplateView):
    """A back-office page filling one context variable from a loader."""

    context_name = "rows"
    loader = None

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context[self.context_name] = self.load()
        return context

    def load(self):
        return self.loader()


class DashboardView(BackofficeRequiredMixin, TemplateView):
    template_name = "backoffice/dashboard.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["overview"] = data.get_overview()
        context["signals"] = data.get_ops_signals()
        return context


class ProductListView(BackofficePageView):
    template_name = "backoffice/products.html"
    loader = staticmethod(data.get_product_rows)


class CollectionListView(BackofficePageView):
    template_name = "backoffice/collections.html"
    loader = staticmethod(data.get_collection_rows)


class HomepageModuleListView(BackofficePageView):
    template_name = "backoffice/homepage.html"
    loader = staticmethod(data.get_homepage_module_rows)


class HomepageModuleDetailView(BackofficePageView):
    template_name = "backoffice/homepage_detail.html"
    context_name = "module"

    def load(self):
        module = data.get_homepage_module(self.kwargs["pk"])
        if module is None:
            raise Http404("Homepage module not found")
        return module


class EditorialListView(BackofficePageView):
    template_name = "backoffice/editorial.html"
    loader = staticmethod(data.get_editorial_rows)


class OrderListView(BackofficePageView):
    template_name = "backoffice/orders.html"
    loader = staticmethod(data.get_order_rows)


class OrderDetailView(BackofficePageView):
    template_name = "backoffice/order_detail.html"
    context_name = "order"

    def load(self):
        order = data.get_order_detail(self.kwargs["pk"])
        if order is None:
            raise Http404("Order not found")
        return order

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["order_statuses"] = OrderStatus.choices
        context["fulfillment_statuses"] = FulfillmentStatus.choices
        context["payment_statuses"] = PaymentStatus.choices
        return context


class DropListView(BackofficePageView):
    template_name = "backoffice/drops.html"
    loader = staticmethod(data.get_drop_rows)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["collections"] = Collection.objects.order_by("slug")
        return context


class AppointmentListView(BackofficePageView):
    template_name = "backoffice/appointments.html"
    loader = staticmethod(data.get_appointment_rows)


class PromotionListView(BackofficePageView):
    template_name = "backoffice/promotions.html"
    loader = staticmethod(data.get_promotion_rows)


class BackofficeActionView(BackofficeRequiredMixin, View):
    """POST endpoint running one back-office command.

    ``action`` receives the submitted form as a dict and the ``pk`` from the
    URL (or None). Missing input is reported as a flash message.
    """

    http_method_names = ["post"]
    action = None
    redirect_to = "backoffice:dashboard"

    def post(self, request, pk=None):
        try:
            self.action(request.POST.dict(), pk)
        except ValueError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, "Saved")
        return redirect(self.get_redirect_url(pk))

    def get_redirect_url(self, pk):
        if self.redirect_to.endswith("-detail") and pk is not None:
            return reverse(self.redirect_to, kwargs={"pk": pk})
        return reverse(self.redirect_to)


# Command adapters: (form data, pk from the URL)
ACTIONS = {
    "create-drop": lambda form, pk: services.create_drop(form),
    "update-drop": lambda form, pk: services.update_drop(pk, form),
    "delete-drop": lambda form, pk: services.delete_drop(pk),
    "close-drop": lambda form, pk: services.close_drop(pk),
    "create-promotion": lambda form, pk: services.create_promotion(form),
    "update-promotion": lambda form, pk: services.update_promotion(pk, form),
    "delete-promotion": lambda form, pk: services.delete_promotion(pk),
    "toggle-promotion": lambda form, pk: services.toggle_promotion(pk),
    "update-order": lambda form, pk: services.update_order_state(
        pk,
        status=form.get("status"),
        fulfillment_status=form.get("fulfillment_status"),
        payment_status=form.get("payment_status"),
        note=form.get("note"),
    ),
    "add-order-note": lambda form, pk: services.add_order_note(pk, form.get("note")),
    "appointment-status": lambda form, pk: services.update_appointment_status(pk, form.get("status")),
    "confirm-appointment": lambda form, pk: services.confirm_appointment(pk),
    "complete-appointment": lambda form, pk: services.complete_appointment(pk),
    "cancel-appointment": lambda form, pk: services.cancel_appointment(pk),
    "reschedule-appointment": lambda form, pk: services.reschedule_appointment(pk, form.get("appointment_at")),
    "appointment-notes": lambda form, pk: services.add_appointment_note(pk, form.get("notes")),
    "assign-concierge": lambda form, pk: services.assign_concierge(pk, form.get("concierge")),
    "create-collection": lambda form, pk: services.create_collection(form),
    "update-collection": lambda form, pk: services.update_collection(pk, form),
    "delete-collection": lambda form, pk: services.delete_collection(pk),
    "add-collection-product": lambda form, pk: services.add_product_to_collection(pk, form.get("product_id")),
    "remove-collection-product": lambda form, pk: services.remove_product_from_collection(pk, form.get("product_id")),
    "toggle-collection-highlight": lambda form, pk: services.toggle_product_highlight(pk, form.get("product_id")),
    "reorder-collection-item": lambda form, pk: services.update_collection_item_order(pk, form.get("sort_order")),
    "publish-post": lambda form, pk: services.publish_post(pk),
    "unpublish-post": lambda form, pk: services.unpublish_post(pk),
}
