"""
Persistence for organizations, accounts and media records.

Functions in this module return domain objects from
:mod:`interface_core.domain`, never ORM instances. Each write commits on its
own; callers that perform several writes get no atomicity across them.
"""

from typing import Generator, List, Optional, Tuple, Type
from contextlib import contextmanager
import logging

from flask import Flask
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.session import Session

from ... import domain
from ..exceptions import AccountExists, OrganizationExists, Unavailable
from .models import db, DBAccount, DBImage, DBOrganization, DBVideo, \
    MediaMixin

logger = logging.getLogger(__name__)

MEDIA_MODELS = {
    domain.MediaKind.IMAGE: DBImage,
    domain.MediaKind.VIDEO: DBVideo
}


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """Context manager for database transaction."""
    try:
        yield db.session
        # The caller may have explicitly committed already, in order to
        # implement exception handling logic. We only want to commit here if
        # there is anything remaining that is not flushed.
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except Exception as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def init_app(app: Flask) -> None:
    """Attach the database to the application."""
    db.init_app(app)


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()


def _to_id(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _organization(db_org: DBOrganization) -> domain.Organization:
    return domain.Organization(
        organization_id=str(db_org.organization_id),
        name=db_org.name,
        description=db_org.description,
        created=db_org.created
    )


def _account(db_account: DBAccount) -> domain.Account:
    return domain.Account(
        account_id=str(db_account.account_id),
        username=db_account.username,
        organization_id=str(db_account.organization_id),
        created=db_account.created
    )


def _media(db_media: MediaMixin) -> domain.MediaRecord:
    return domain.MediaRecord(
        title=db_media.title,
        link=db_media.link,
        organization_id=str(db_media.organization_id),
        mimetype=db_media.mimetype,
        size=db_media.size,
        record_id=str(db_media.record_id),
        created=db_media.created
    )


def get_account(account_id: str) -> Optional[domain.Account]:
    """Get an account by its ID."""
    _id = _to_id(account_id)
    if _id is None:
        return None
    try:
        db_account = db.session.get(DBAccount, _id)
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    if db_account is None:
        return None
    return _account(db_account)


def get_account_by_username(username: str) -> Optional[domain.Account]:
    """Get an account by its username."""
    credentials = get_credentials(username)
    if credentials is None:
        return None
    return credentials[0]


def get_credentials(username: str) -> Optional[Tuple[domain.Account, str]]:
    """Get an account and its password hash by username."""
    try:
        db_account = db.session.query(DBAccount) \
            .filter(DBAccount.username == username) \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    if db_account is None:
        return None
    return _account(db_account), db_account.password


def get_organization(organization_id: str) -> Optional[domain.Organization]:
    """Get an organization by its ID."""
    _id = _to_id(organization_id)
    if _id is None:
        return None
    try:
        db_org = db.session.get(DBOrganization, _id)
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    if db_org is None:
        return None
    return _organization(db_org)


def get_organization_by_name(name: str) -> Optional[domain.Organization]:
    """Get an organization by its name."""
    try:
        db_org = db.session.query(DBOrganization) \
            .filter(DBOrganization.name == name) \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    if db_org is None:
        return None
    return _organization(db_org)


def create_organization(name: str, description: Optional[str] = None) \
        -> domain.Organization:
    """
    Create a new organization.

    Raises
    ------
    :class:`OrganizationExists`
        If the name is already taken.
    :class:`Unavailable`
        On any other database error.
    """
    db_org = DBOrganization(name=name, description=description)
    try:
        with transaction() as session:
            session.add(db_org)
            session.commit()
    except IntegrityError as e:
        raise OrganizationExists(f'Organization {name} exists') from e
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    return _organization(db_org)


def create_account(username: str, password_hash: str,
                   organization_id: str) -> domain.Account:
    """
    Create a new account in an existing organization.

    Raises
    ------
    :class:`AccountExists`
        If the username is already taken.
    :class:`Unavailable`
        On any other database error.
    """
    db_account = DBAccount(username=username, password=password_hash,
                           organization_id=_to_id(organization_id))
    try:
        with transaction() as session:
            session.add(db_account)
            session.commit()
    except IntegrityError as e:
        raise AccountExists(f'Account {username} exists') from e
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    return _account(db_account)


def store_media(kind: domain.MediaKind,
                records: List[domain.MediaRecord]) -> List[domain.MediaRecord]:
    """Insert media records in a single commit."""
    model: Type[MediaMixin] = MEDIA_MODELS[kind]
    db_records = [
        model(title=record.title, link=record.link,     # type: ignore
              organization_id=_to_id(record.organization_id),
              mimetype=record.mimetype, size=record.size)
        for record in records
    ]
    try:
        with transaction() as session:
            session.add_all(db_records)
            session.commit()
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    return [_media(db_record) for db_record in db_records]


def list_media(kind: domain.MediaKind,
               organization_id: str) -> List[domain.MediaRecord]:
    """Get the media records of an organization, oldest first."""
    model = MEDIA_MODELS[kind]
    try:
        db_records = db.session.query(model) \
            .filter(model.organization_id == _to_id(organization_id)) \
            .order_by(model.record_id) \
            .all()
    except SQLAlchemyError as e:
        raise Unavailable('Database error: %s' % e) from e
    return [_media(db_record) for db_record in db_records]
