"""
Upload controller, shared by the image and video routes.

Every file in a request is checked against the media type allow-list before
anything is written to the bucket. Files are then streamed to the bucket one
at a time, and their metadata is recorded in a single insert. Objects already
written are left in place if a later step fails.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from werkzeug.datastructures import MultiDict

from .. import domain, intake, status
from ..context import get_application_config
from ..exceptions import InternalError, InvalidTypeError, NotFoundError, \
    SizeLimitError, ValidationError
from ..services import database, storage
from ..services.exceptions import ObjectTooLarge, StorageFailed, Unavailable

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]

NO_FILES = "No files uploaded. Use 'file' for single or 'files' for " \
    "multiple uploads."


def upload(kind: domain.MediaKind, account: domain.Account, parts: MultiDict,
           max_files_header: Optional[str] = None) -> ResponseData:
    """
    Store uploaded files for the account's organization.

    Parameters
    ----------
    kind : :class:`domain.MediaKind`
    account : :class:`domain.Account`
        The authenticated uploader.
    parts : :class:`MultiDict`
        File parts of the request.
    max_files_header : str or None
        Value of the ``X-Max-Files`` request header.

    Returns
    -------
    dict
        ``message`` and ``files``.
    int
        Status code. 200 if all goes well.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`.ValidationError`
    :class:`.InvalidTypeError`
    :class:`.SizeLimitError`
    :class:`.NotFoundError`
    :class:`.InternalError`
    """
    policy = intake.get_policy(kind)
    config = get_application_config()

    try:
        organization = database.get_organization(account.organization_id)
    except Unavailable as e:
        logger.error('Could not load organization: %s', e)
        raise InternalError('Internal server error') from e
    if organization is None:
        raise NotFoundError('Organization not found')

    limit = intake.max_files(max_files_header,
                             int(config.get('DEFAULT_MAX_FILES',
                                            intake.DEFAULT_MAX_FILES)))
    parsed = intake.parse_parts(parts, limit)
    if parsed.outcome is intake.ParseOutcome.FAILED:
        logger.debug('Upload parts did not match either layout')
        raise ValidationError(parsed.reason)
    if not parsed.files:
        raise ValidationError(NO_FILES)
    logger.debug('Parsed %i file(s) as %s upload', len(parsed.files),
                 parsed.outcome.value)

    for part in parsed.files:
        if not intake.is_allowed(part, policy):
            logger.debug('Rejected %s upload of type %s', kind.value,
                         part.mimetype)
            raise InvalidTypeError('Invalid file type. Allowed types: '
                                   f'{policy.allowed_types_display}')

    bucket = storage.current_session()
    records: List[domain.MediaRecord] = []
    for part in parsed.files:
        name = intake.object_name(part.filename or '')
        try:
            stored = bucket.store(part.stream, name, part.mimetype,
                                  policy.max_bytes)
        except ObjectTooLarge as e:
            raise SizeLimitError('File size exceeds limit of '
                                 f'{policy.max_size_display}') from e
        except StorageFailed as e:
            logger.error('Storage write failed: %s', e)
            raise InternalError('File upload failed') from e
        records.append(domain.MediaRecord(
            title=intake.title(part.filename) or name,
            link=stored.url,
            organization_id=organization.organization_id,
            mimetype=part.mimetype,
            size=stored.size
        ))

    try:
        records = database.store_media(kind, records)
    except Unavailable as e:
        logger.error('Error saving file details to database: %s', e)
        raise InternalError('Failed to save file details to database') from e

    logger.info('Stored %i %s(s) for organization %s', len(records),
                kind.value, organization.organization_id)
    if len(records) > 1:
        message = 'Files uploaded successfully'
    else:
        message = 'File uploaded successfully'
    data = {
        'message': message,
        'files': [record.to_summary() for record in records]
    }
    return data, status.HTTP_200_OK, {}
