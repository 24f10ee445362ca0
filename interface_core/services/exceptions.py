"""Provides exceptions occurring with external services."""


class Unavailable(IOError):
    """The database could not complete the request."""


class AccountExists(RuntimeError):
    """An account with this username already exists."""


class OrganizationExists(RuntimeError):
    """An organization with this name already exists."""


class StorageFailed(RuntimeError):
    """Failed to write an object to the storage bucket."""


class ObjectTooLarge(StorageFailed):
    """An object exceeded its size ceiling while being written."""
