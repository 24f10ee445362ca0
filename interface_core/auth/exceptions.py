"""Exceptions raised while working with credentials and tokens."""


class InvalidToken(ValueError):
    """Token signature, payload or expiry is not valid."""


class HashingError(RuntimeError):
    """The password hashing library failed."""


class MalformedDigest(ValueError):
    """A stored password digest is not a bcrypt hash."""
