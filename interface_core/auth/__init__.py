"""Credentials, session tokens, and the guard for authenticated routes."""

from . import decorators, passwords, tokens
from .exceptions import HashingError, InvalidToken, MalformedDigest
