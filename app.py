"""Provides application for development purposes."""
from interface_core.factory import create_web_app
from interface_core.services import database

app = create_web_app()
with app.app_context():
    database.create_all()
