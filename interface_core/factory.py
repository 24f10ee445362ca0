"""Application factory for the interface API."""

import logging

from flask import Flask, Response, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from . import app_logging, status
from .auth import tokens
from .intake import UploadRequest
from .limits import limiter
from .routes import api
from .services import database, storage

logger = logging.getLogger(__name__)


def create_web_app() -> Flask:
    """Initialize and configure the interface application."""
    app = Flask('interface_core')
    app.request_class = UploadRequest
    app.config.from_pyfile('config.py')

    level = app.config['LOGLEVEL']
    app_logging.setup_logger(int(level) if str(level).isdigit()
                             else str(level).upper())

    database.init_app(app)
    tokens.init_app(app)
    storage.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=app.config['ALLOWED_ORIGINS'],
         supports_credentials=True)

    app.register_blueprint(api.root)
    app.register_blueprint(api.blueprint)

    app.before_request(limit_json_body)
    app.after_request(apply_response_headers)
    register_error_handlers(app)

    if app.config['CREATE_DB']:
        with app.app_context():
            database.create_all()

    logger.info('Interface API %s started in %s mode',
                app.config['VERSION'], app.config['APP_ENV'])
    return app


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(HTTPException)(jsonify_exception)
    app.errorhandler(Exception)(handle_unexpected)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    for header in ('Retry-After', 'Allow'):
        if header in exc_resp.headers:
            response.headers[header] = exc_resp.headers[header]
    return response


def handle_unexpected(error: Exception) -> Response:
    """Log anything unhandled, and hide the details from the client."""
    logger.exception('Unhandled error: %s', error)
    response: Response = jsonify(error='Internal server error')
    response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return response


def limit_json_body() -> None:
    """Refuse JSON bodies larger than ``JSON_MAX_CONTENT_LENGTH``."""
    limit = int(current_app.config['JSON_MAX_CONTENT_LENGTH'])
    if request.is_json and (request.content_length or 0) > limit:
        raise RequestEntityTooLarge('Request body too large')


def apply_response_headers(response: Response) -> Response:
    """Apply security headers to all responses."""
    response.headers['Content-Security-Policy'] = "frame-ancestors 'none'"
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer'
    if current_app.config['PRODUCTION']:
        response.headers['Strict-Transport-Security'] = \
            'max-age=31536000; includeSubDomains'
    return response
