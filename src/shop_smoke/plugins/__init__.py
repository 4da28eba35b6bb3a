"""Pytest plugins for shop-smoke."""
