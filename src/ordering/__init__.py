"""Ordering context: shopping cart, order placement and order history."""
