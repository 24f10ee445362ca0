"""Helpers for working with the Flask application context."""

from typing import Any, Optional

from flask import g, Flask, current_app, has_app_context


def get_application_config(app: Optional[Flask] = None) -> dict:
    """
    Get the configuration of ``app`` or of the current application.

    Parameters
    ----------
    app : :class:`Flask` or None
        If not provided, falls back to the application in the current
        context.

    Returns
    -------
    dict
        Application configuration. Empty if there is no application.
    """
    if app is not None:
        return app.config
    if has_app_context():
        return current_app.config
    return {}


def get_application_global() -> Optional[Any]:
    """Get the request-scoped ``g`` object, or ``None`` outside a context."""
    if has_app_context():
        return g
    return None
