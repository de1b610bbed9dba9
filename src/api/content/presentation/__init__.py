"""Presentation layer for the content bounded context."""
