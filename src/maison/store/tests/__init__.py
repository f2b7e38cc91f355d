"""Tests for maison.store."""
