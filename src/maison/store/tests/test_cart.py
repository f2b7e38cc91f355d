"""Tests for the cart service and its JSON endpoints."""

import pytest

from maison.store.models import Cart, CartItem

from .conftest import CART_COOKIE


@pytest.mark.django_db
class TestAddToCart:
    def test_creates_cart_and_sets_cookie(self, client, variant):
        response = client.post("/fr/cart/add/", {"variant_id": variant.pk, "quantity": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["itemCount"] == 2
        assert body["cart"]["items"][0]["product_name"] == "Robe Nocturne"
        assert body["cart"]["subtotal_cents"] == 840000

        cart = Cart.objects.get()
        assert response.cookies[CART_COOKIE].value == cart.session_key
        assert response.cookies[CART_COOKIE]["httponly"]

    def test_adding_again_increments_quantity(self, client, variant):
        client.post("/fr/cart/add/", {"variant_id": variant.pk})
        response = client.post("/fr/cart/add/", {"variant_id": variant.pk, "quantity": 3})

        assert response.json()["itemCount"] == 4
        assert CartItem.objects.get().quantity == 4
        assert Cart.objects.count() == 1

    def test_quantity_below_one_counts_as_one(self, client, variant):
        response = client.post("/fr/cart/add/", {"variant_id": variant.pk, "quantity": -5})

        assert response.json()["itemCount"] == 1

    def test_json_body(self, client, variant):
        response = client.post(
            "/en/cart/add/",
            data={"variant_id": variant.pk},
            content_type="application/json",
        )

        assert response.json()["cart"]["items"][0]["product_name"] == "Nocturne Dress"

    def test_unknown_variant(self, client, db):
        response = client.post("/en/cart/add/", {"variant_id": 999999})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Variant not found", "itemCount": 0}
        assert not Cart.objects.exists()

    def test_signed_in_customer_owns_new_cart(self, client, customer, variant):
        client.force_login(customer)

        client.post("/fr/cart/add/", {"variant_id": variant.pk})

        assert Cart.objects.get().user == customer

    def test_get_not_allowed(self, client, db):
        assert client.get("/fr/cart/add/").status_code == 405


@pytest.mark.django_db
class TestUpdateCart:
    def test_update_quantity(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        item = anonymous_cart.items.get()

        response = client.post("/fr/cart/update/", {"item_id": item.pk, "quantity": 5})

        assert response.json()["cart"]["item_count"] == 5

    def test_zero_removes_line(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        item = anonymous_cart.items.get()

        response = client.post("/fr/cart/update/", {"item_id": item.pk, "quantity": 0})

        assert response.json()["cart"]["items"] == []
        assert not CartItem.objects.exists()

    def test_non_numeric_quantity_is_rejected(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        item = anonymous_cart.items.get()

        response = client.post("/fr/cart/update/", {"item_id": item.pk, "quantity": "deux"})

        assert response.status_code == 400
        assert response.json()["error"] == "Quantité invalide"
        assert response.json()["cart"]["item_count"] == 2
        item.refresh_from_db()
        assert item.quantity == 2

    def test_non_numeric_quantity_error_is_localized(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        item = anonymous_cart.items.get()

        response = client.post("/en/cart/update/", {"item_id": item.pk, "quantity": "two"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid quantity"

    def test_remove(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        item = anonymous_cart.items.get()

        response = client.post("/fr/cart/remove/", {"item_id": item.pk})

        assert response.json()["success"] is True
        assert not CartItem.objects.exists()

    def test_item_of_another_cart_is_not_found(self, client, anonymous_cart, second_variant):
        other = Cart.objects.create(session_key="other-key")
        foreign = CartItem.objects.create(cart=other, variant=second_variant, quantity=1)
        client.cookies[CART_COOKIE] = anonymous_cart.session_key

        response = client.post("/en/cart/update/", {"item_id": foreign.pk, "quantity": 3})

        assert response.status_code == 404
        assert response.json()["cart"]["item_count"] == 2
        foreign.refresh_from_db()
        assert foreign.quantity == 1

    def test_without_cart(self, client, db):
        response = client.post("/en/cart/remove/", {"item_id": 1})

        assert response.status_code == 404


@pytest.mark.django_db
class TestCartOwnership:
    def test_cart_of_another_customer_is_ignored(self, client, customer, other_customer, anonymous_cart):
        anonymous_cart.user = other_customer
        anonymous_cart.save()
        client.cookies[CART_COOKIE] = anonymous_cart.session_key
        client.force_login(customer)

        response = client.get("/fr/cart/")

        assert response.context["cart"].item_count == 0

    def test_unowned_cookie_cart_is_claimed(self, client, customer, anonymous_cart):
        client.force_login(customer)
        client.cookies[CART_COOKIE] = anonymous_cart.session_key

        response = client.get("/fr/cart/")

        assert response.context["cart"].item_count == 2
        anonymous_cart.refresh_from_db()
        assert anonymous_cart.user == customer


@pytest.mark.django_db
class TestCartPage:
    def test_badge_count(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key

        response = client.get("/en/cart/")

        assert response.status_code == 200
        assert response.context["cart_summary"].item_count == 2

    def test_checkout_success_clears_cookie(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key

        response = client.get("/en/cart/", {"checkout": "success"})

        assert response.cookies[CART_COOKIE].value == ""
        assert response.context["cart"].item_count == 0

    def test_clear_session_endpoint(self, client, anonymous_cart):
        client.cookies[CART_COOKIE] = anonymous_cart.session_key

        response = client.post("/en/cart/clear-session/")

        assert response.json() == {"ok": True}
        assert response.cookies[CART_COOKIE].value == ""
