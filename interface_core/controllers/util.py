"""Helpers for :mod:`interface_core.controllers`."""

from typing import Any, Tuple

from ..exceptions import ValidationError

MAX_USERNAME_LENGTH = 100
MAX_PASSWORD_LENGTH = 128

CREDENTIALS_REQUIRED = 'Valid username and password are required'
INVALID_LENGTH = 'Invalid input length'


def validate_credentials(payload: Any) -> Tuple[str, str]:
    """
    Check the username and password of a login or registration request.

    Returns
    -------
    str
        The username, with surrounding whitespace removed.
    str
        The password, as given.

    Raises
    ------
    :class:`ValidationError`
    """
    if not isinstance(payload, dict):
        raise ValidationError(CREDENTIALS_REQUIRED)
    username = payload.get('username')
    password = payload.get('password')
    if not isinstance(username, str) or not isinstance(password, str) \
            or not username.strip() or not password.strip():
        raise ValidationError(CREDENTIALS_REQUIRED)
    if len(username) > MAX_USERNAME_LENGTH \
            or len(password) > MAX_PASSWORD_LENGTH:
        raise ValidationError(INVALID_LENGTH)
    return username.strip(), password
