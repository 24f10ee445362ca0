"""
HTTP-facing errors raised by controllers.

Each error carries the message that is returned to the client as
``{"error": "<description>"}``; see :func:`interface_core.factory.jsonify_exception`.
Messages must never include internal details.
"""

from werkzeug.exceptions import BadRequest, Conflict, InternalServerError, \
    NotFound, Unauthorized


class ValidationError(BadRequest):
    """Malformed or oversized input."""


class InvalidTypeError(BadRequest):
    """An uploaded file has a media type outside the allow-list."""


class SizeLimitError(BadRequest):
    """An uploaded file is larger than the per-file ceiling."""


class AuthenticationError(Unauthorized):
    """Bad credentials, or a missing, invalid or expired token."""


class NotFoundError(NotFound):
    """A resource referenced by an authenticated account is gone."""


class ConflictError(Conflict):
    """The username or organization name is already registered."""


class InternalError(InternalServerError):
    """Unexpected failure. Detail is logged, never returned."""
