"""HTTP routes."""

from . import api
