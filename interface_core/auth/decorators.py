"""
Authentication of requests to protected routes.

This module provides :func:`authenticated`, a decorator for Flask routes that
require a logged-in account. The client must send its session token in the
``Authorization`` header::

    Authorization: Bearer <token>

The decorator verifies the token, loads the account, and passes it to the
route function as the keyword argument ``account``:

.. code-block:: python

   @blueprint.route('/thing', methods=['POST'])
   @authenticated
   def create_thing(account: domain.Account) -> Response:
       ...

Any failure raises :class:`.AuthenticationError` (401) with a generic message.
An account that no longer exists is treated the same as a bad token, so that
the response does not reveal whether an account ID is in use.
"""

from typing import Any, Callable, Optional
from functools import wraps
import logging

from flask import request

from .. import domain
from ..exceptions import AuthenticationError, InternalError
from ..services import database
from ..services.exceptions import Unavailable
from . import tokens
from .exceptions import InvalidToken

logger = logging.getLogger(__name__)

AUTH_REQUIRED = 'Authentication required'
INVALID_TOKEN = 'Invalid authentication token'


def get_bearer_token(header: Optional[str]) -> Optional[str]:
    """Get the token from an ``Authorization`` header value."""
    if not header or not header.startswith('Bearer '):
        return None
    token = header[len('Bearer '):].strip()
    return token or None


def resolve_account(header: Optional[str]) -> domain.Account:
    """
    Get the account identified by an ``Authorization`` header.

    Raises
    ------
    :class:`AuthenticationError`
        If the header is missing or malformed, the token is not valid, or the
        account does not exist.
    :class:`InternalError`
        If the database is not available.
    """
    token = get_bearer_token(header)
    if token is None:
        logger.debug('No bearer token; aborting')
        raise AuthenticationError(AUTH_REQUIRED)

    try:
        account_id = tokens.current_issuer().verify(token)
    except InvalidToken as e:
        logger.debug('Invalid auth token: %s', e)
        raise AuthenticationError(INVALID_TOKEN) from e

    try:
        account = database.get_account(account_id)
    except Unavailable as e:
        logger.error('Could not load account %s: %s', account_id, e)
        raise InternalError('Internal server error') from e
    if account is None:
        logger.debug('Token refers to missing account %s', account_id)
        raise AuthenticationError(INVALID_TOKEN)
    return account


def authenticated(func: Callable) -> Callable:
    """Require a valid session token, and pass the account to ``func``."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        account = resolve_account(request.headers.get('Authorization'))
        logger.debug('Request is authenticated, proceeding')
        return func(*args, account=account, **kwargs)
    return wrapper
