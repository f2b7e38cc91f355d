"""Maison Aurèle storefront and back-office."""
