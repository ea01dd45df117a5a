"""Detection services."""
