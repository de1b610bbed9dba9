"""Domain layer for the content bounded context."""
