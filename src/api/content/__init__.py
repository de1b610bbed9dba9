"""Content bounded context.

Tenant-owned content entries and the authorization layer that scopes every
read and write to the tenant of the caller.
"""
