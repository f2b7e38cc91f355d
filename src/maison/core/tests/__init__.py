"""Tests for maison.core."""
