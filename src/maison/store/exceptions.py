"""Store exceptions.

Services raise these; views translate them into localized JSON errors.
"""


class CartError(Exception):
    """Base error for cart operations."""


class VariantNotFound(CartError):
    """The requested product variant does not exist."""


class CartItemNotFound(CartError):
    """The cart line does not belong to the current cart."""


class CheckoutError(Exception):
    """A checkout session could not be started."""

    def __init__(self, message, code="checkout_failed"):
        self.code = code
        super().__init__(message)


class AddressError(Exception):
    """An address operation was refused."""

    def __init__(self, message, code="address_error"):
        self.code = code
        super().__init__(message)
