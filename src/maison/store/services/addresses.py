"""Address book service layer.

Every operation is scoped to the customer passed in; another customer's
address is reported as not found.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from maison.core.i18n import localized

from ..exceptions import AddressError
from ..models import Address

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = (
    "label",
    "first_name",
    "last_name",
    "line1",
    "line2",
    "city",
    "region",
    "postal_code",
    "country",
    "phone",
)
REQUIRED_FIELDS = ("first_name", "last_name", "line1", "city", "postal_code", "country")


def _require_user(user, locale):
    if user is None or not user.is_authenticated:
        raise AddressError(localized(locale, "Veuillez vous connecter", "Please sign in"), code="auth_required")


def _clean(data, partial=False):
    cleaned = {}
    for name in ADDRESS_FIELDS:
        if name not in data:
            continue
        value = data[name]
        value = value.strip() if isinstance(value, str) else value
        if name in ("line2", "region", "phone"):
            value = value or None
        elif name == "country":
            value = (value or "").upper()
        elif value is None:
            value = ""
        cleaned[name] = value

    required = [name for name in REQUIRED_FIELDS if name in cleaned or not partial]
    missing = [name for name in required if not cleaned.get(name)]
    return cleaned, missing


def _owned_address(user, address_id, locale):
    try:
        address = Address.objects.filter(pk=address_id, user=user).first()
    except (TypeError, ValueError, ValidationError):
        address = None
    if address is None:
        raise AddressError(localized(locale, "Adresse introuvable", "Address not found"), code="not_found")
    return address


def list_addresses(user):
    """The customer's addresses, default first."""
    if user is None or not user.is_authenticated:
        return Address.objects.none()
    return Address.objects.filter(user=user).order_by("-is_default", "label", "created_at")


def get_address(user, address_id):
    if user is None or not user.is_authenticated:
        return None
    try:
        return Address.objects.filter(pk=address_id, user=user).first()
    except (TypeError, ValueError, ValidationError):
        return None


@transaction.atomic
def create_address(user, data, locale, is_default=False):
    """Create an address for the customer.

    The first address of a customer always becomes the default one.

    Args:
        user: The signed-in customer
        data: Mapping of address fields
        locale: Locale for error messages
        is_default: Make this the default address

    Returns:
        The created Address

    Raises:
        AddressError: If the customer is anonymous or fields are missing
    """
    _require_user(user, locale)

    cleaned, missing = _clean(data)
    if missing:
        raise AddressError(
            localized(locale, "Champs obligatoires manquants", "Missing required fields"),
            code="invalid",
        )

    if is_default:
        Address.objects.filter(user=user).update(is_default=False)
    first = not Address.objects.filter(user=user).exists()

    address = Address.objects.create(user=user, is_default=is_default or first, **cleaned)
    logger.info("Created address %s for user %s", address.pk, user.pk)
    return address


@transaction.atomic
def update_address(user, address_id, data, locale, is_default=None):
    """Update the given fields of one of the customer's addresses."""
    _require_user(user, locale)
    address = _owned_address(user, address_id, locale)

    cleaned, missing = _clean(data, partial=True)
    if missing:
        raise AddressError(
            localized(locale, "Champs obligatoires manquants", "Missing required fields"),
            code="invalid",
        )

    if is_default and not address.is_default:
        Address.objects.filter(user=user).exclude(pk=address.pk).update(is_default=False)
        address.is_default = True

    for name, value in cleaned.items():
        setattr(address, name, value)
    address.save()
    return address


@transaction.atomic
def delete_address(user, address_id, locale):
    """Delete an address, promoting another one when it was the default."""
    _require_user(user, locale)
    address = _owned_address(user, address_id, locale)
    was_default = address.is_default
    address.delete()

    if was_default:
        successor = Address.objects.filter(user=user).order_by("label", "created_at").first()
        if successor is not None:
            successor.is_default = True
            successor.save(update_fields=["is_default", "updated_at"])


@transaction.atomic
def set_default_address(user, address_id, locale):
    _require_user(user, locale)
    address = _owned_address(user, address_id, locale)
    Address.objects.filter(user=user).update(is_default=False)
    address.is_default = True
    address.save(update_fields=["is_default", "updated_at"])
    return address
