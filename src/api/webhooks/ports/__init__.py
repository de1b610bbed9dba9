"""Ports for the webhooks bounded context."""
