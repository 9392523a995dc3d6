"""
Exceptions raised inside the permission service. None of them leave the
public query API; they let the resolver tell a store failure from a missing record.
"""


class PermissionStoreError(Exception):
    """The permission store could not be read."""
