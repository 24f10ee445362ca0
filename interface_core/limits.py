"""Per-client request rate limits, keyed on the remote address."""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

TOO_MANY_LOGINS = 'Too many login attempts. Try again later.'
TOO_MANY_REGISTRATIONS = 'Too many registration attempts. Try again later.'
TOO_MANY_UPLOADS = 'Too many uploads. Try again later.'


def login_limit() -> str:
    return current_app.config['LOGIN_RATE_LIMIT']


def register_limit() -> str:
    return current_app.config['REGISTER_RATE_LIMIT']


def upload_limit() -> str:
    return current_app.config['UPLOAD_RATE_LIMIT']
