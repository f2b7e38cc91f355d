"""Tests for the back-office pages and actions."""

import pytest
from django.contrib.messages import get_messages

from maison.store.models import Promotion


def flash(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.mark.django_db
class TestAccess:
    def test_anonymous_redirected_to_account(self, client):
        response = client.get("/admin/")

        assert response.status_code == 302
        assert response.url == "/fr/account/"

    def test_customer_redirected_to_account(self, client, customer):
        client.force_login(customer)

        response = client.get("/admin/orders/")

        assert response.url == "/fr/account/"

    def test_actions_are_guarded_too(self, client, customer, promotion):
        client.force_login(customer)

        client.post(f"/admin/promotions/{promotion.pk}/delete/")

        assert Promotion.objects.exists()


@pytest.mark.django_db
class TestPages:
    @pytest.mark.parametrize(
        "path",
        ["/admin/", "/admin/products/", "/admin/collections/", "/admin/homepage/", "/admin/editorial/",
         "/admin/orders/", "/admin/drops/", "/admin/appointments/", "/admin/promotions/"],
    )
    def test_pages_render(self, editor_client, product, collection, drop, promotion, appointment, order, path):
        response = editor_client.get(path)

        assert response.status_code == 200

    def test_dashboard_context(self, editor_client, product):
        response = editor_client.get("/admin/")

        assert response.context["overview"].products == 1
        assert response.context["is_backoffice"] is True

    def test_order_detail(self, editor_client, order):
        response = editor_client.get(f"/admin/orders/{order.pk}/")

        assert response.status_code == 200
        assert response.context["order"].number == "MA-20260314-12345"

    def test_unknown_order_is_404(self, editor_client, db):
        response = editor_client.get("/admin/orders/00000000-0000-0000-0000-000000000000/")

        assert response.status_code == 404

    def test_unknown_homepage_module_is_404(self, editor_client, db):
        assert editor_client.get("/admin/homepage/999/").status_code == 404

    def test_get_on_action_not_allowed(self, editor_client, promotion):
        assert editor_client.get(f"/admin/promotions/{promotion.pk}/toggle/").status_code == 405


@pytest.mark.django_db
class TestActions:
    def test_create_promotion_redirects_with_flash(self, editor_client):
        response = editor_client.post("/admin/promotions/new/", {"code": "nocturne15", "discount_value": "15"})

        assert response.status_code == 302
        assert response.url == "/admin/promotions/"
        assert flash(response) == ["Saved"]
        assert Promotion.objects.get().code == "NOCTURNE15"

    def test_invalid_input_is_flashed(self, editor_client):
        response = editor_client.post("/admin/promotions/new/", {"code": ""})

        assert response.url == "/admin/promotions/"
        assert flash(response) == ["Code is required"]
        assert not Promotion.objects.exists()

    def test_order_update_redirects_to_detail(self, editor_client, order):
        response = editor_client.post(
            f"/admin/orders/{order.pk}/state/",
            {"status": "IN_PRODUCTION", "fulfillment_status": "IN_PROGRESS", "payment_status": "PAID"},
        )

        assert response.url == f"/admin/orders/{order.pk}/"
        order.refresh_from_db()
        assert order.status == "IN_PRODUCTION"

    def test_close_drop(self, editor_client, drop):
        response = editor_client.post(f"/admin/drops/{drop.pk}/close/")

        assert response.url == "/admin/drops/"
        drop.refresh_from_db()
        assert drop.ends_at is not None

    def test_publish_post(self, editor_client, draft_post):
        editor_client.post(f"/admin/editorial/{draft_post.pk}/publish/")

        draft_post.refresh_from_db()
        assert draft_post.status == "ACTIVE"

    def test_unknown_target_is_404(self, editor_client, db):
        assert editor_client.post("/admin/promotions/999/toggle/").status_code == 404
