"""
Test configuration shared by every test module.

The environment is set here, before any application is created, because the
application reads its configuration from the environment at startup.
"""
import os

import pytest

os.environ.setdefault('SQLALCHEMY_DATABASE_URI', 'sqlite://')
os.environ.setdefault('JWT_SECRET', 'foosecret')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ.setdefault('RATELIMIT_ENABLED', '0')
os.environ.setdefault('CREATE_DB', '0')
os.environ.setdefault('LOGLEVEL', 'WARNING')
os.environ.setdefault('GCP_BUCKET_NAME', 'test-bucket')
os.environ.setdefault('GCP_PROJECT_ID', 'test-project')
os.environ.setdefault('ALLOWED_ORIGINS', 'http://localhost:3000')
os.environ.setdefault('APP_ENV', 'development')


@pytest.fixture()
def app():
    from interface_core.factory import create_web_app
    from interface_core.services import database

    app = create_web_app()
    with app.app_context():
        database.create_all()
    yield app
    with app.app_context():
        database.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()
