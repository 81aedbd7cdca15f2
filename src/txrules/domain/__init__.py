"""Domain layer for txrules application."""
