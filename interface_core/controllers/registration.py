"""
Registration controller.

A registration creates a new organization and its first account, then logs
the account in. The organization is written first; the two writes are
committed separately, so a failure while creating the account leaves the
organization in place.
"""

from typing import Any, Dict, Optional, Tuple
import logging

from flask import current_app

from .. import status
from ..auth import passwords, tokens
from ..auth.exceptions import HashingError
from ..exceptions import ConflictError, InternalError, ValidationError
from ..services import database
from ..services.exceptions import AccountExists, OrganizationExists, \
    Unavailable
from .util import validate_credentials

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

MIN_PASSWORD_LENGTH = 4
MIN_USERNAME_LENGTH = 3
MAX_STORED_USERNAME_LENGTH = 50
MIN_COMPANY_LENGTH = 2
MAX_COMPANY_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

ACCOUNT_EXISTS = 'Username already registered'
ORGANIZATION_EXISTS = 'Company already registered'


def _validate(payload: Any) -> Tuple[str, str, str, Optional[str]]:
    username, password = validate_credentials(payload)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError('Password must be at least '
                              f'{MIN_PASSWORD_LENGTH} characters long')
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_STORED_USERNAME_LENGTH:
        raise ValidationError('Username must be between '
                              f'{MIN_USERNAME_LENGTH} and '
                              f'{MAX_STORED_USERNAME_LENGTH} characters')

    company = payload.get('company')
    if not isinstance(company, str) or not company.strip():
        raise ValidationError('Valid company name is required')
    company = company.strip()
    if not MIN_COMPANY_LENGTH <= len(company) <= MAX_COMPANY_LENGTH:
        raise ValidationError('Company name must be between '
                              f'{MIN_COMPANY_LENGTH} and '
                              f'{MAX_COMPANY_LENGTH} characters')

    description = payload.get('description')
    if description is not None and (not isinstance(description, str)
                                    or len(description) > MAX_DESCRIPTION_LENGTH):
        raise ValidationError('Company description must be at most '
                              f'{MAX_DESCRIPTION_LENGTH} characters')
    return username, password, company, description


def register(payload: Any) -> ResponseData:
    """
    Register a new organization and its first account.

    Parameters
    ----------
    payload : dict
        Should include ``username``, ``password`` and ``company``, and may
        include a company ``description``.

    Returns
    -------
    dict
        ``access_token`` and ``user``.
    int
        Status code. 201 if all goes well.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`.ValidationError`
    :class:`.ConflictError`
    :class:`.InternalError`
    """
    username, password, company, description = _validate(payload)

    try:
        existing_account = database.get_account_by_username(username)
        existing_organization = database.get_organization_by_name(company)
    except Unavailable as e:
        logger.error('Registration lookup failed: %s', e)
        raise InternalError('Internal server error') from e
    if existing_account is not None:
        raise ConflictError(ACCOUNT_EXISTS)
    if existing_organization is not None:
        raise ConflictError(ORGANIZATION_EXISTS)

    try:
        password_hash = passwords.hash_password(
            password, int(current_app.config['BCRYPT_ROUNDS'])
        )
    except HashingError as e:
        logger.error('Registration failed: %s', e)
        raise InternalError('Internal server error') from e

    # Either write can still lose a race with a concurrent registration; the
    # unique constraints catch that.
    try:
        organization = database.create_organization(company, description)
        account = database.create_account(username, password_hash,
                                          organization.organization_id)
    except AccountExists as e:
        logger.debug('Lost registration race: %s', e)
        raise ConflictError(ACCOUNT_EXISTS) from e
    except OrganizationExists as e:
        logger.debug('Lost registration race: %s', e)
        raise ConflictError(ORGANIZATION_EXISTS) from e
    except Unavailable as e:
        logger.error('Registration failed: %s', e)
        raise InternalError('Internal server error') from e

    logger.info('Registered account %s in organization %s',
                account.account_id, organization.organization_id)
    token = tokens.current_issuer().issue(account.account_id)
    data = {'access_token': token, 'user': account.to_summary()}
    return data, status.HTTP_201_CREATED, {}
