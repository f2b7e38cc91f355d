"""Back-office URL configuration (mounted at /admin/)."""

from django.urls import path

from . import views
from .views import ACTIONS, BackofficeActionView

app_name = "backoffice"


def action(route, name, redirect_to):
    view = BackofficeActionView.as_view(action=ACTIONS[name], redirect_to=redirect_to)
    return path(route, view, name=name)


urlpatterns = [
    path("", views.DashboardView.as_view(), name="dashboard"),
    path("products/", views.ProductListView.as_view(), name="products"),
    path("collections/", views.CollectionListView.as_view(), name="collections"),
    path("homepage/", views.HomepageModuleListView.as_view(), name="homepage"),
    path("homepage/<int:pk>/", views.HomepageModuleDetailView.as_view(), name="homepage-detail"),
    path("editorial/", views.EditorialListView.as_view(), name="editorial"),
    path("orders/", views.OrderListView.as_view(), name="orders"),
    path("orders/<uuid:pk>/", views.OrderDetailView.as_view(), name="order-detail"),
    path("drops/", views.DropListView.as_view(), name="drops"),
    path("appointments/", views.AppointmentListView.as_view(), name="appointments"),
    path("promotions/", views.PromotionListView.as_view(), name="promotions"),

    # Drops
    action("drops/new/", "create-drop", "backoffice:drops"),
    action("drops/<int:pk>/update/", "update-drop", "backoffice:drops"),
    action("drops/<int:pk>/delete/", "delete-drop", "backoffice:drops"),
    action("drops/<int:pk>/close/", "close-drop", "backoffice:drops"),

    # Promotions
    action("promotions/new/", "create-promotion", "backoffice:promotions"),
    action("promotions/<int:pk>/update/", "update-promotion", "backoffice:promotions"),
    action("promotions/<int:pk>/delete/", "delete-promotion", "backoffice:promotions"),
    action("promotions/<int:pk>/toggle/", "toggle-promotion", "backoffice:promotions"),

    # Orders
    action("orders/<uuid:pk>/state/", "update-order", "backoffice:order-detail"),
    action("orders/<uuid:pk>/notes/", "add-order-note", "backoffice:order-detail"),

    # Appointments
    action("appointments/<int:pk>/status/", "appointment-status", "backoffice:appointments"),
    action("appointments/<int:pk>/confirm/", "confirm-appointment", "backoffice:appointments"),
    action("appointments/<int:pk>/complete/", "complete-appointment", "backoffice:appointments"),
    action("appointments/<int:pk>/cancel/", "cancel-appointment", "backoffice:appointments"),
    action("appointments/<int:pk>/reschedule/", "reschedule-appointment", "backoffice:appointments"),
    action("appointments/<int:pk>/notes/", "appointment-notes", "backoffice:appointments"),
    action("appointments/<int:pk>/concierge/", "assign-concierge", "backoffice:appointments"),

    # Collections
    action("collections/new/", "create-collection", "backoffice:collections"),
    action("collections/<int:pk>/update/", "update-collection", "backoffice:collections"),
    action("collections/<int:pk>/delete/", "delete-collection", "backoffice:collections"),
    action("collections/<int:pk>/products/add/", "add-collection-product", "backoffice:collections"),
    action("collections/<int:pk>/products/remove/", "remove-collection-product", "backoffice:collections"),
    action("collections/<int:pk>/products/highlight/", "toggle-collection-highlight", "backoffice:collections"),
    action("collections/items/<int:pk>/order/", "reorder-collection-item", "backoffice:collections"),

    # Editorial
    action("editorial/<int:pk>/publish/", "publish-post", "backoffice:editorial"),
    action("editorial/<int:pk>/unpublish/", "unpublish-post", "backoffice:editorial"),
]
