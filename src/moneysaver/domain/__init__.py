"""Domain layer for moneysaver application."""
