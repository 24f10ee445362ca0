"""Defines the core data structures for the interface core service."""

from typing import Any, Dict, List, NamedTuple, Optional
from datetime import datetime
from enum import Enum


class Organization(NamedTuple):
    """A tenant. Owns accounts and media."""

    organization_id: str
    name: str
    """Unique, 2 to 100 characters."""

    description: Optional[str] = None
    created: Optional[datetime] = None


class Account(NamedTuple):
    """An authenticable identity that belongs to exactly one organization."""

    account_id: str
    username: str
    """Unique, 3 to 50 characters."""

    organization_id: str
    created: Optional[datetime] = None

    def to_summary(self) -> Dict[str, str]:
        """The parts of the account that may be shown to its owner."""
        return {'id': self.account_id, 'username': self.username}


class MediaKind(Enum):
    """Categories of uploaded media."""

    IMAGE = 'image'
    VIDEO = 'video'


class UploadPolicy(NamedTuple):
    """Constraints applied to every file of one :class:`MediaKind`."""

    kind: MediaKind
    max_bytes: int
    allowed_types: List[str]

    @property
    def max_size_display(self) -> str:
        """Human-readable size ceiling, e.g. ``15MB``."""
        megabytes = self.max_bytes / (1024 * 1024)
        if megabytes >= 1:
            return f'{megabytes:g}MB'
        return f'{self.max_bytes}B'

    @property
    def allowed_types_display(self) -> str:
        """Short names of the allowed types, e.g. ``JPEG, PNG``."""
        names: List[str] = []
        for mimetype in self.allowed_types:
            name = TYPE_NAMES.get(mimetype, mimetype.split('/')[-1].upper())
            if name not in names:
                names.append(name)
        return ', '.join(names)


TYPE_NAMES = {
    'image/jpeg': 'JPEG',
    'image/png': 'PNG',
    'image/gif': 'GIF',
    'application/pdf': 'PDF',
    'video/mp4': 'MP4',
    'video/quicktime': 'MOV',
    'video/x-msvideo': 'AVI',
    'video/avi': 'AVI',
    'video/webm': 'WEBM',
    'video/mpeg': 'MPEG',
    'video/mpeg-2': 'MPEG',
    'video/mp2t': 'MPEG-TS',
    'video/mpeg-4': 'MPEG-4',
    'video/mpeg-4-generic': 'MPEG-4',
}
"""Display names for common media types."""


class MediaRecord(NamedTuple):
    """Metadata about an object stored in the bucket."""

    title: str
    """Original filename supplied by the client."""

    link: str
    """Public URL of the stored object."""

    organization_id: str
    mimetype: str
    size: int
    record_id: Optional[str] = None
    created: Optional[datetime] = None

    def to_summary(self) -> Dict[str, Any]:
        """Fields echoed back to the uploader."""
        return {
            'title': self.title,
            'link': self.link,
            'mimetype': self.mimetype,
            'size': self.size
        }
