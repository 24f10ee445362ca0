"""
Writes uploaded files to a Google Cloud Storage bucket.

Objects are streamed to the bucket with a resumable upload. The size ceiling
is enforced while the bytes are read, so an oversized file fails part-way
through rather than after it has been written in full.
"""

from typing import Any, BinaryIO, NamedTuple, Optional
from urllib.parse import quote
import logging

from flask import Flask
from google.cloud import storage as gcs

from ...context import get_application_config, get_application_global
from ..exceptions import ObjectTooLarge, StorageFailed

logger = logging.getLogger(__name__)


class StoredObject(NamedTuple):
    """An object written to the bucket."""

    name: str
    url: str
    size: int


class LimitedStream(object):
    """
    File-like wrapper that refuses to yield more than ``limit`` bytes.

    Reading past the limit raises :class:`ObjectTooLarge`.
    """

    def __init__(self, stream: BinaryIO, limit: int) -> None:
        self._stream = stream
        self._limit = limit
        self._position = 0
        self.size = 0
        """Number of bytes read so far."""

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        self._position += len(data)
        self.size = max(self.size, self._position)
        if self._position > self._limit:
            raise ObjectTooLarge(f'Object exceeds {self._limit} bytes')
        return data

    def tell(self) -> int:
        return self._position

    def seek(self, offset: int, whence: int = 0) -> int:
        self._stream.seek(offset, whence)
        self._position = self._stream.tell()
        return self._position


class BucketStore(object):
    """
    Manages a connection to a storage bucket.

    The client is thread safe; this class holds the bucket handle and the
    settings used for every write.
    """

    def __init__(self, bucket_name: str, project_id: Optional[str] = None,
                 key_file: Optional[str] = None,
                 public_base_url: str = 'https://storage.googleapis.com',
                 acl: Optional[str] = 'publicRead') -> None:
        """Open the connection to the bucket."""
        logger.debug('New storage client for bucket %s', bucket_name)
        if key_file:
            client = gcs.Client.from_service_account_json(key_file,
                                                          project=project_id)
        else:
            client = gcs.Client(project=project_id)
        self.bucket_name = bucket_name
        self.bucket = client.bucket(bucket_name)
        self._public_base_url = public_base_url.rstrip('/')
        self._acl = acl or None

    def public_url(self, name: str) -> str:
        """Get the public URL of an object."""
        return f'{self._public_base_url}/{self.bucket_name}/{quote(name, safe="")}'

    def store(self, stream: BinaryIO, name: str, content_type: str,
              max_bytes: int) -> StoredObject:
        """
        Stream an object into the bucket.

        Parameters
        ----------
        stream : file-like
        name : str
            Object name.
        content_type : str
            Set on the object as its ``Content-Type``.
        max_bytes : int
            Largest accepted object size.

        Returns
        -------
        :class:`StoredObject`

        Raises
        ------
        :class:`ObjectTooLarge`
            If the stream yields more than ``max_bytes``.
        :class:`StorageFailed`
            If the write fails for any other reason.
        """
        limited = LimitedStream(stream, max_bytes)
        blob = self.bucket.blob(name)
        try:
            blob.upload_from_file(limited, content_type=content_type,
                                  predefined_acl=self._acl)
        except ObjectTooLarge:
            logger.debug('Object %s exceeded %i bytes', name, max_bytes)
            raise
        except Exception as e:
            raise StorageFailed(f'Failed to store {name}: {e}') from e
        return StoredObject(name=name, url=self.public_url(name),
                            size=limited.size)


def init_app(app: Flask) -> None:
    """Set default configuration parameters for an application instance."""
    config = get_application_config(app)
    config.setdefault('GCP_PROJECT_ID', None)
    config.setdefault('GCP_BUCKET_NAME', 'interface-v1')
    config.setdefault('GCP_KEY_FILE_PATH', None)
    config.setdefault('STORAGE_PUBLIC_BASE_URL',
                      'https://storage.googleapis.com')
    config.setdefault('STORAGE_OBJECT_ACL', 'publicRead')


def get_bucket_store(app: Optional[Flask] = None) -> BucketStore:
    """Get a new connection to the configured bucket."""
    config = get_application_config(app)
    return BucketStore(
        config['GCP_BUCKET_NAME'],
        project_id=config.get('GCP_PROJECT_ID'),
        key_file=config.get('GCP_KEY_FILE_PATH'),
        public_base_url=config.get('STORAGE_PUBLIC_BASE_URL',
                                   'https://storage.googleapis.com'),
        acl=config.get('STORAGE_OBJECT_ACL', 'publicRead')
    )


def current_session() -> BucketStore:
    """Get/create :class:`.BucketStore` for this context."""
    g: Any = get_application_global()
    if not g:
        return get_bucket_store()
    if 'bucket_store' not in g:
        g.bucket_store = get_bucket_store()
    return g.bucket_store
