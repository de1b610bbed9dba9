"""Shared Kernel module.

Components that both bounded contexts agree to depend on: the request
tenant context, bearer credential handling, change events, and the
observation context used by every probe. Changes here affect content and
webhooks alike and should be carefully coordinated.
"""
