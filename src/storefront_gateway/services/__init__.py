"""Domain services composing upstream clients, caches and mappers."""
