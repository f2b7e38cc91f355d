"""Cart service layer.

The cart of a request is resolved in this order:

1. the signed-in customer's own cart;
2. the cart named by the ``maison_aurele_cart`` cookie, which a signed-in
   customer claims when it has no owner yet.

A cart owned by someone else is never served through the cookie.
"""

import logging
import uuid
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F, Sum

from maison.catalog.data import localized_product_name, localized_translations, ordered_media, pick_hero, asset_url
from maison.catalog.models import ProductTranslation, ProductVariant
from maison.core.conf import get_setting

from ..exceptions import CartItemNotFound, VariantNotFound
from ..models import Cart, CartItem
from .session import (
    cart_cookie_name,
    clear_session_key,
    current_user,
    persist_cart_session,
    read_session_key,
)

logger = logging.getLogger(__name__)


@dataclass
class CartSummary:
    cart_id: str | None
    item_count: int


@dataclass
class CartLine:
    id: int
    variant_id: int
    product_slug: str
    product_name: str
    hero_image: str | None
    price_cents: int
    quantity: int
    size: str | None = None
    color: str | None = None

    @property
    def line_total_cents(self):
        return self.price_cents * self.quantity


@dataclass
class CartSnapshot:
    cart_id: str | None
    currency: str
    item_count: int
    subtotal_cents: int
    items: list[CartLine] = field(default_factory=list)


def empty_cart_snapshot():
    return CartSnapshot(
        cart_id=None,
        currency=get_setting("DEFAULT_CURRENCY"),
        item_count=0,
        subtotal_cents=0,
        items=[],
    )


def claim_cart(cart, user):
    """Attach an unowned cart to ``user``."""
    if user is not None and cart.user_id is None:
        cart.user = user
        cart.save(update_fields=["user", "updated_at"])
        logger.info("Cart %s claimed by user %s", cart.pk, user.pk)
    return cart


def find_existing_cart(request):
    """Return the cart of this request, or None."""
    user = current_user(request)

    if user is not None:
        cart = Cart.objects.filter(user=user).order_by("-updated_at").first()
        if cart is not None:
            return cart

    session_key = read_session_key(request, cart_cookie_name())
    if not session_key:
        return None

    cart = Cart.objects.filter(session_key=session_key).first()
    if cart is None:
        return None

    if cart.user_id is not None and (user is None or cart.user_id != user.pk):
        return None

    return claim_cart(cart, user)


def ensure_cart(request):
    """Return the cart of this request, creating one when there is none.

    A new cart gets a fresh session key whose cookie is set on the response.
    """
    cart = find_existing_cart(request)
    if cart is not None:
        return cart

    session_key = str(uuid.uuid4())
    cart = Cart.objects.create(
        session_key=session_key,
        currency=get_setting("DEFAULT_CURRENCY"),
        user=current_user(request),
    )
    persist_cart_session(request, session_key)
    logger.debug("Created cart %s", cart.pk)
    return cart


def count_items(cart):
    return cart.items.aggregate(total=Sum("quantity"))["total"] or 0


def get_cart_summary(request):
    cart = find_existing_cart(request)
    if cart is None:
        return CartSummary(cart_id=None, item_count=0)
    return CartSummary(cart_id=str(cart.pk), item_count=count_items(cart))


def build_cart_snapshot(cart, locale):
    """Shape ``cart`` into a snapshot with names and images in ``locale``."""
    if cart is None:
        return empty_cart_snapshot()

    items = (
        CartItem.objects.filter(cart=cart)
        .select_related("variant__product")
        .prefetch_related(
            localized_translations("variant__product__translations", ProductTranslation, locale),
            ordered_media("variant__product__media"),
        )
        .order_by("created_at", "id")
    )

    lines = []
    for item in items:
        variant = item.variant
        product = variant.product
        lines.append(
            CartLine(
                id=item.pk,
                variant_id=variant.pk,
                product_slug=product.slug,
                product_name=localized_product_name(product),
                hero_image=asset_url(pick_hero(product.media.all())),
                price_cents=variant.price_cents,
                quantity=item.quantity,
                size=variant.size or None,
                color=variant.color or None,
            )
        )

    return CartSnapshot(
        cart_id=str(cart.pk),
        currency=cart.currency,
        item_count=sum(line.quantity for line in lines),
        subtotal_cents=sum(line.line_total_cents for line in lines),
        items=lines,
    )


def get_cart_snapshot(request, locale):
    return build_cart_snapshot(find_existing_cart(request), locale)


def _get_variant(variant_id):
    try:
        return ProductVariant.objects.filter(pk=variant_id).first()
    except (TypeError, ValueError, ValidationError):
        return None


def add_to_cart(request, variant_id, quantity=1, locale=None):
    """Add ``quantity`` of a variant to the cart of this request.

    Args:
        request: The current request
        variant_id: Primary key of the ProductVariant
        quantity: Units to add; anything below 1 counts as 1
        locale: Locale for the returned snapshot

    Returns:
        The updated CartSnapshot

    Raises:
        VariantNotFound: If the variant does not exist
    """
    try:
        quantity = max(1, int(quantity or 1))
    except (TypeError, ValueError):
        quantity = 1

    variant = _get_variant(variant_id)
    if variant is None:
        raise VariantNotFound(f"Variant {variant_id} not found")

    cart = ensure_cart(request)

    with transaction.atomic():
        item, created = CartItem.objects.select_for_update().get_or_create(
            cart=cart,
            variant=variant,
            defaults={"quantity": quantity},
        )
        if not created:
            CartItem.objects.filter(pk=item.pk).update(quantity=F("quantity") + quantity)
        cart.save(update_fields=["updated_at"])

    logger.debug("Added %s x variant %s to cart %s", quantity, variant.pk, cart.pk)
    return build_cart_snapshot(cart, locale)


def update_cart_item_quantity(request, item_id, quantity, locale=None):
    """Set the quantity of a cart line; zero or less removes it.

    Raises:
        CartItemNotFound: If the line does not belong to this request's cart
    """
    cart = find_existing_cart(request)
    if cart is None:
        raise CartItemNotFound(f"Cart item {item_id} not found")

    try:
        target = CartItem.objects.filter(pk=item_id, cart=cart).first()
    except (TypeError, ValueError, ValidationError):
        target = None
    if target is None:
        raise CartItemNotFound(f"Cart item {item_id} not found")

    quantity = int(quantity)
    if quantity <= 0:
        target.delete()
    else:
        target.quantity = quantity
        target.save(update_fields=["quantity", "updated_at"])

    return build_cart_snapshot(cart, locale)


def remove_cart_item(request, item_id, locale=None):
    return update_cart_item_quantity(request, item_id, 0, locale)


def clear_cart_session(request):
    """Forget the cart cookie; used once a checkout has completed."""
    clear_session_key(request, cart_cookie_name())
