"""Flask configuration."""
import os
import secrets

#################### General config for app ####################
APP_ENV = os.environ.get('APP_ENV', 'development')
"""Deployment environment. ``production`` hardens cookies and headers."""

PRODUCTION = APP_ENV == 'production'

VERSION = '1.0.0'
"""The application version."""

LOGLEVEL = os.environ.get('LOGLEVEL', 'INFO')

ALLOWED_ORIGINS = [
    origin.strip() for origin
    in os.environ.get('ALLOWED_ORIGINS', 'http://localhost:3000').split(',')
    if origin.strip()
]
"""Origins allowed to make credentialed cross-origin requests."""

JSON_MAX_CONTENT_LENGTH = int(os.environ.get('JSON_MAX_CONTENT_LENGTH',
                                             str(100 * 1024)))
"""Ceiling in bytes for JSON request bodies. Does not apply to uploads."""


#################### Sessions ####################
JWT_SECRET = os.environ.get('JWT_SECRET', secrets.token_urlsafe(32))
"""Secret used to sign session tokens.

If not set, a random secret is generated at startup and tokens will not
survive a restart."""

SESSION_DURATION = int(os.environ.get('SESSION_DURATION', str(24 * 60 * 60)))
"""Lifetime of a session token, in seconds."""

AUTH_TOKEN_COOKIE_NAME = os.environ.get('AUTH_TOKEN_COOKIE_NAME', 'auth-token')
COOKIE_DOMAIN = os.environ.get('COOKIE_DOMAIN', 'localhost')
AUTH_TOKEN_COOKIE_SECURE = PRODUCTION
AUTH_TOKEN_COOKIE_SAMESITE = 'Strict' if PRODUCTION else 'Lax'

BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', '10'))
"""bcrypt work factor for new password hashes."""


#################### Database ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///interface_core.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', '0')))
"""Create missing tables when the application starts."""


#################### Object storage ####################
GCP_PROJECT_ID = os.environ.get('GCP_PROJECT_ID', 'interface-v1')
GCP_BUCKET_NAME = os.environ.get('GCP_BUCKET_NAME', 'interface-v1')
GCP_KEY_FILE_PATH = os.environ.get('GCP_KEY_FILE_PATH')
"""Service account key file. If not set, application default credentials
are used."""

STORAGE_PUBLIC_BASE_URL = os.environ.get('STORAGE_PUBLIC_BASE_URL',
                                         'https://storage.googleapis.com')
STORAGE_OBJECT_ACL = os.environ.get('STORAGE_OBJECT_ACL', 'publicRead')
"""Predefined ACL for uploaded objects. Set to an empty string for buckets
with uniform bucket-level access."""

DEFAULT_MAX_FILES = int(os.environ.get('DEFAULT_MAX_FILES', '10'))
"""Files per request when the client does not send ``X-Max-Files``."""

IMAGE_UPLOAD_MAX_BYTES = int(os.environ.get('IMAGE_UPLOAD_MAX_BYTES',
                                            str(15 * 1024 * 1024)))
IMAGE_UPLOAD_MIMETYPES = os.environ.get(
    'IMAGE_UPLOAD_MIMETYPES',
    'image/jpeg,image/png,image/gif,application/pdf'
).split(',')

VIDEO_UPLOAD_MAX_BYTES = int(os.environ.get('VIDEO_UPLOAD_MAX_BYTES',
                                            str(400 * 1024 * 1024)))
VIDEO_UPLOAD_MIMETYPES = os.environ.get(
    'VIDEO_UPLOAD_MIMETYPES',
    'video/mp4,video/quicktime,video/x-msvideo,video/webm,video/avi,'
    'video/mpeg,video/mp2t,video/mpeg-2,video/mpeg-4,video/mpeg-4-generic'
).split(',')


#################### Rate limits ####################
"""See https://flask-limiter.readthedocs.io/en/stable/configuration.html"""

RATELIMIT_ENABLED = bool(int(os.environ.get('RATELIMIT_ENABLED', '1')))
RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '100 per 15 minutes')
RATELIMIT_HEADERS_ENABLED = True

LOGIN_RATE_LIMIT = os.environ.get('LOGIN_RATE_LIMIT', '500 per 15 minutes')
REGISTER_RATE_LIMIT = os.environ.get('REGISTER_RATE_LIMIT', '10 per hour')
UPLOAD_RATE_LIMIT = os.environ.get('UPLOAD_RATE_LIMIT', '100 per 15 minutes')
