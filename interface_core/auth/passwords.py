"""One-way password hashing with bcrypt."""

from typing import Dict
import logging

import bcrypt

from .exceptions import HashingError, MalformedDigest

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72
"""bcrypt ignores everything past the 72nd byte."""


def _encode(password: str) -> bytes:
    return password.encode('utf-8')[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Generate a salted bcrypt hash of ``password``."""
    try:
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as e:
        raise HashingError(f'Could not hash password: {e}') from e
    return hashed.decode('ascii')


def check_password(password: str, encrypted: str) -> bool:
    """
    Check a password against a bcrypt hash.

    Returns
    -------
    bool
        ``False`` if the password does not match.

    Raises
    ------
    :class:`MalformedDigest`
        If ``encrypted`` is not a bcrypt hash.
    """
    try:
        return bcrypt.checkpw(_encode(password), encrypted.encode('ascii'))
    except (ValueError, UnicodeEncodeError) as e:
        raise MalformedDigest('Stored password hash is malformed') from e


_dummy_hashes: Dict[int, str] = {}
"""Dummy hashes by work factor."""


def dummy_check(password: str, rounds: int = DEFAULT_ROUNDS) -> None:
    """
    Spend the time of a real check when there is no hash to check against.

    ``rounds`` must match the work factor of stored hashes, or the check
    takes a different time than a real one.
    """
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = hash_password('not-a-real-password', rounds)
    check_password(password, _dummy_hashes[rounds])
