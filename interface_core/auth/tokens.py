"""
Signed session tokens.

A session token is an HS256 JWT with the claims ``userId`` (the account ID),
``iat`` and ``exp``. Tokens are not stored anywhere; expiry is the only way
a token stops working.
"""

from typing import Optional
from datetime import datetime, timedelta, timezone
import logging

import jwt
from flask import Flask, current_app

from ..context import get_application_config
from .exceptions import InvalidToken

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'
DEFAULT_DURATION = 24 * 60 * 60


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


class SessionIssuer(object):
    """Issues and verifies session tokens with a single secret."""

    def __init__(self, secret: str, duration: int = DEFAULT_DURATION) -> None:
        if not secret:
            raise ValueError('A signing secret is required')
        self._secret = secret
        self._duration = timedelta(seconds=duration)

    def issue(self, account_id: str, now: Optional[datetime] = None) -> str:
        """
        Create a token for an account.

        Parameters
        ----------
        account_id : str
        now : :class:`datetime`
            Time of issuance. Defaults to the current time.

        Returns
        -------
        str
        """
        issued = now or _now()
        claims = {
            'userId': account_id,
            'iat': int(issued.timestamp()),
            'exp': int((issued + self._duration).timestamp())
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str, now: Optional[datetime] = None) -> str:
        """
        Get the account ID from a token.

        Raises
        ------
        :class:`InvalidToken`
            If the signature does not match, the payload is malformed, or the
            token has expired.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[ALGORITHM],
                                options={'verify_exp': False,
                                         'verify_iat': False,
                                         'require': ['exp']})
        except jwt.exceptions.PyJWTError as e:
            raise InvalidToken('Not a valid token') from e

        account_id = claims.get('userId')
        expires = claims.get('exp')
        if not isinstance(account_id, str) or not account_id:
            raise InvalidToken('Token payload malformed')
        if not isinstance(expires, (int, float)) or isinstance(expires, bool):
            raise InvalidToken('Token payload malformed')

        current = now or _now()
        if current.timestamp() >= expires:
            raise InvalidToken('Token has expired')
        return account_id


def init_app(app: Flask) -> None:
    """Create the application's issuer from its configuration."""
    config = get_application_config(app)
    app.extensions['session_issuer'] = SessionIssuer(
        config['JWT_SECRET'],
        int(config.get('SESSION_DURATION', DEFAULT_DURATION))
    )


def current_issuer() -> SessionIssuer:
    """Get the :class:`SessionIssuer` of the current application."""
    return current_app.extensions['session_issuer']
