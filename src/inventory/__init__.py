"""Inventory context: the stock ledger that guards against overselling."""
