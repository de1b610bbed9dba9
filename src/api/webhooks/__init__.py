"""Webhooks bounded context.

Resolves tenant webhook endpoints and delivers change events to them.
"""
