"""
Upload intake: which file parts of a request are accepted, and how they are named.

A request may carry either several parts under the field ``files`` or a
single part under the field ``file``. :func:`parse_parts` tries the
multi-file layout first and falls back to the single-file layout, and reports
which one matched (or that neither did) as a :class:`ParsedUpload`.
"""

from typing import Any, List, NamedTuple, Optional
from enum import Enum
import random
import re
import time

from flask import Request
from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.formparser import default_stream_factory

from . import domain
from .context import get_application_config
from .exceptions import SizeLimitError

MULTIPLE_FIELD = 'files'
SINGLE_FIELD = 'file'
DEFAULT_MAX_FILES = 10
MAX_FILENAME_LENGTH = 200
"""Longest sanitized filename kept in an object name."""

MAX_TITLE_LENGTH = 255
UPLOAD_OVERHEAD_BYTES = 1024 * 1024
"""Allowance for multipart headers and boundaries in a request body."""

UNEXPECTED_FIELD = "Unexpected file field. Use 'file' for single or " \
    "'files' for multiple uploads."

_UNSAFE_CHARACTERS = re.compile(r'[^a-zA-Z0-9.-]')


class ParseOutcome(Enum):
    """Which request layout matched."""

    MULTIPLE = 'multiple'
    SINGLE = 'single'
    FAILED = 'failed'


class ParsedUpload(NamedTuple):
    """Result of :func:`parse_parts`."""

    outcome: ParseOutcome
    files: List[FileStorage]
    reason: str = ''


def parse_parts(parts: MultiDict, max_files: int) -> ParsedUpload:
    """
    Pick the file parts to accept from a request.

    Parameters
    ----------
    parts : :class:`MultiDict`
        Usually ``request.files``. Parts without a filename are ignored.
    max_files : int
        Largest number of parts accepted under ``files``.

    Returns
    -------
    :class:`ParsedUpload`
        ``MULTIPLE`` with zero or more files, ``SINGLE`` with zero or one
        file, or ``FAILED`` with a reason that can be shown to the client.
    """
    named: MultiDict = MultiDict([
        (field, part) for field, part in parts.items(multi=True)
        if part.filename
    ])
    fields = set(named.keys())

    if fields <= {MULTIPLE_FIELD}:
        files = named.getlist(MULTIPLE_FIELD)
        if len(files) <= max_files:
            return ParsedUpload(ParseOutcome.MULTIPLE, files)
        reason = f'Too many files. At most {max_files} files can be ' \
            'uploaded at once.'
    else:
        reason = UNEXPECTED_FIELD

    # The multi-file layout did not match; try it as a single-file upload.
    single = named.getlist(SINGLE_FIELD)
    if fields <= {SINGLE_FIELD} and len(single) <= 1:
        return ParsedUpload(ParseOutcome.SINGLE, single)
    return ParsedUpload(ParseOutcome.FAILED, [], reason)


def max_files(header: Optional[str], default: int = DEFAULT_MAX_FILES) -> int:
    """Read the per-request file cap from the ``X-Max-Files`` header."""
    try:
        value = int(header) if header is not None else 0
    except ValueError:
        value = 0
    return value if value > 0 else default


def object_name(filename: str) -> str:
    """
    Generate a collision-resistant object name for an uploaded file.

    The name is ``<epoch milliseconds>-<random>-<sanitized filename>``, where
    every character of the filename outside ``[a-zA-Z0-9.-]`` becomes ``_``.
    Long filenames are shortened to :const:`MAX_FILENAME_LENGTH`, keeping the
    extension.
    """
    sanitized = truncate(_UNSAFE_CHARACTERS.sub('_', filename),
                         MAX_FILENAME_LENGTH)
    suffix = random.randint(0, 10 ** 9)
    return f'{int(time.time() * 1000)}-{suffix}-{sanitized}'


def get_policy(kind: domain.MediaKind) -> domain.UploadPolicy:
    """Get the upload policy for a kind of media from the configuration."""
    config = get_application_config()
    prefix = kind.value.upper()
    allowed = [
        mimetype.strip().lower()
        for mimetype in config[f'{prefix}_UPLOAD_MIMETYPES']
        if mimetype.strip()
    ]
    return domain.UploadPolicy(kind=kind,
                               max_bytes=int(config[f'{prefix}_UPLOAD_MAX_BYTES']),
                               allowed_types=allowed)


def is_allowed(part: FileStorage, policy: domain.UploadPolicy) -> bool:
    """Whether the declared type of a part is in the policy's allow-list."""
    return (part.mimetype or '').lower() in policy.allowed_types


def truncate(filename: str, limit: int) -> str:
    """Shorten ``filename`` to ``limit`` characters, keeping its extension."""
    if len(filename) <= limit:
        return filename
    stem, dot, extension = filename.rpartition('.')
    if not dot or len(extension) >= limit // 2:
        return filename[:limit]
    return f'{stem[:limit - len(extension) - 1]}.{extension}'


def title(filename: Optional[str]) -> str:
    """The title recorded for an uploaded file."""
    return truncate(filename or '', MAX_TITLE_LENGTH)


class CappedSpool(object):
    """
    Buffer for one multipart part that refuses to grow past ``limit`` bytes.

    The part is refused with :class:`SizeLimitError` while it is being read
    from the request, before the rest of it arrives.
    """

    def __init__(self, spool: Any, limit: int, message: str) -> None:
        self._spool = spool
        self._limit = limit
        self._message = message
        self.written = 0

    def write(self, data: bytes) -> int:
        if self.written + len(data) > self._limit:
            raise SizeLimitError(self._message)
        self.written += len(data)
        return self._spool.write(data)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._spool, name)


class UploadRequest(Request):
    """
    Request that can cap multipart parts before they are buffered.

    Call :meth:`limit_uploads` before touching :attr:`files`.
    """

    upload_policy: Optional[domain.UploadPolicy] = None

    def limit_uploads(self, policy: domain.UploadPolicy,
                      file_limit: int) -> None:
        """Cap each part at the policy ceiling, and the whole body."""
        self.upload_policy = policy
        self.max_content_length = file_limit * policy.max_bytes \
            + UPLOAD_OVERHEAD_BYTES

    def _get_file_stream(self, total_content_length: Optional[int],
                         content_type: Optional[str],
                         filename: Optional[str] = None,
                         content_length: Optional[int] = None) -> Any:
        spool = default_stream_factory(
            total_content_length=total_content_length,
            filename=filename,
            content_type=content_type,
            content_length=content_length
        )
        if self.upload_policy is None:
            return spool
        return CappedSpool(spool, self.upload_policy.max_bytes,
                           'File size exceeds limit of '
                           f'{self.upload_policy.max_size_display}')
