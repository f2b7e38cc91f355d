"""Store app: cart, wishlist, addresses, checkout and order intake.

Anonymous shoppers are tracked by cookie-keyed carts and wishlists that are
claimed by, or merged into, the customer's own records on sign-in. Orders are
only ever created from a verified payment webhook.
"""
