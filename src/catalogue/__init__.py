"""Catalogue context: products and their hosted images."""
