"""
Login controller.

A successful login returns a session token in the response body. The UI
route also sets the token as an HTTP-only cookie, using the ``cookies`` entry
of the response data.

Failed logins get the same response whether the username is unknown or the
password is wrong, so that the API cannot be used to find out which
usernames exist.
"""

from typing import Any, Dict, Tuple
import logging

from flask import current_app

from .. import status
from ..auth import passwords, tokens
from ..auth.exceptions import MalformedDigest
from ..exceptions import AuthenticationError, InternalError
from ..services import database
from ..services.exceptions import Unavailable
from .util import validate_credentials

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

INVALID_CREDENTIALS = 'Invalid credentials'


def login(payload: Any) -> ResponseData:
    """
    Log in with a username and password.

    Parameters
    ----------
    payload : dict
        Should include ``username`` and ``password``.

    Returns
    -------
    dict
        ``access_token`` and ``user``, plus ``cookies`` for the route.
    int
        Status code. 200 if all goes well.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`.ValidationError`
    :class:`.AuthenticationError`
    :class:`.InternalError`
    """
    username, password = validate_credentials(payload)

    try:
        credentials = database.get_credentials(username)
    except Unavailable as e:
        logger.error('Could not load credentials: %s', e)
        raise InternalError('Internal server error') from e

    if credentials is None:
        logger.debug('No such account')
        passwords.dummy_check(password,
                              int(current_app.config['BCRYPT_ROUNDS']))
        raise AuthenticationError(INVALID_CREDENTIALS)

    account, password_hash = credentials
    try:
        valid = passwords.check_password(password, password_hash)
    except MalformedDigest as e:
        logger.error('Account %s has a malformed password hash',
                     account.account_id)
        raise InternalError('Internal server error') from e
    if not valid:
        logger.debug('Wrong password for account %s', account.account_id)
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = tokens.current_issuer().issue(account.account_id)
    logger.info('Account %s logged in', account.account_id)
    duration = int(current_app.config['SESSION_DURATION'])
    data = {
        'access_token': token,
        'user': account.to_summary(),
        'cookies': {
            'auth_token_cookie': (token, duration)
        }
    }
    return data, status.HTTP_200_OK, {}
