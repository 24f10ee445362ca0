"""JSON API routes."""

from datetime import timedelta
from typing import Any
import logging

from flask import Blueprint, Response, current_app, jsonify, make_response, \
    request

from .. import domain, intake, status
from ..auth.decorators import authenticated
from ..controllers import authentication, registration, uploads
from ..limits import limiter, login_limit, register_limit, upload_limit, \
    TOO_MANY_LOGINS, TOO_MANY_REGISTRATIONS, TOO_MANY_UPLOADS

logger = logging.getLogger(__name__)

blueprint = Blueprint('api', __name__, url_prefix='/api')
root = Blueprint('root', __name__, url_prefix='')


def set_cookies(response: Response, data: dict) -> None:
    """
    Update a :class:`.Response` with cookies in controller data.

    Controllers seeking to update cookies must include a 'cookies' key in
    their response data.
    """
    cookies = data.pop('cookies', None)
    if cookies is None:
        return None
    config = current_app.config
    for cookie_key, (cookie_value, expires) in cookies.items():
        cookie_name = config[f'{cookie_key.upper()}_NAME']
        logger.debug('Set cookie %s, max_age %s', cookie_name, expires)
        response.set_cookie(cookie_name, cookie_value,
                            max_age=timedelta(seconds=expires),
                            path='/',
                            domain=config['COOKIE_DOMAIN'],
                            httponly=True,
                            secure=config['AUTH_TOKEN_COOKIE_SECURE'],
                            samesite=config['AUTH_TOKEN_COOKIE_SAMESITE'])


def _json_payload() -> Any:
    return request.get_json(silent=True)


def _upload(kind: domain.MediaKind, account: domain.Account) -> Response:
    header = request.headers.get('X-Max-Files')
    # Parts are capped while they are read, so this must run before
    # request.files is touched.
    request.limit_uploads(  # type: ignore
        intake.get_policy(kind),
        intake.max_files(header, int(current_app.config['DEFAULT_MAX_FILES']))
    )
    data, code, headers = uploads.upload(kind, account, request.files, header)
    return make_response(jsonify(data), code, headers)


@blueprint.route('/login', methods=['POST'])
@limiter.limit(login_limit, error_message=TOO_MANY_LOGINS)
def login() -> Response:
    """Log in with a username and password."""
    data, code, headers = authentication.login(_json_payload())
    # Flask puts cookie-setting methods on the response, so we do that here
    # instead of in the controller.
    cookies = {'cookies': data.pop('cookies', None)}
    response = make_response(jsonify(data), code, headers)
    set_cookies(response, cookies)
    return response


@blueprint.route('/register', methods=['POST'])
@limiter.limit(register_limit, error_message=TOO_MANY_REGISTRATIONS)
def register() -> Response:
    """Create a new organization and its first account."""
    data, code, headers = registration.register(_json_payload())
    return make_response(jsonify(data), code, headers)


@blueprint.route('/image-upload', methods=['POST'])
@limiter.limit(upload_limit, error_message=TOO_MANY_UPLOADS)
@authenticated
def upload_images(account: domain.Account) -> Response:
    """Upload one or more images."""
    return _upload(domain.MediaKind.IMAGE, account)


@blueprint.route('/video-upload', methods=['POST'])
@limiter.limit(upload_limit, error_message=TOO_MANY_UPLOADS)
@authenticated
def upload_videos(account: domain.Account) -> Response:
    """Upload one or more videos."""
    return _upload(domain.MediaKind.VIDEO, account)


@blueprint.route('/status', methods=['GET'])
def service_status() -> Response:
    """Get if the app is running."""
    return make_response(jsonify(status='OK'), status.HTTP_200_OK)


@root.route('/', methods=['GET'])
def index() -> Response:
    return make_response(jsonify(message='Interface API is running'),
                         status.HTTP_200_OK)
