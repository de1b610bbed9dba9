"""Ports for the content bounded context."""
