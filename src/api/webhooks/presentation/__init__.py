"""HTTP presentation layer for the webhooks bounded context."""
