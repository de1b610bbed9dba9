"""Shared middleware for cross-cutting concerns.

This module contains the request-scoped tenant context value object that is
shared across bounded contexts. Resolution of the context from a bearer
credential happens in the dependency layer.
"""
