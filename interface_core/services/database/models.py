"""Interface core database models."""

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import declared_attr, relationship

db: SQLAlchemy = SQLAlchemy()


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class DBOrganization(db.Model):    # type: ignore
    """A tenant. Names are unique."""

    __tablename__ = 'organizations'

    organization_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500))
    created = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class DBAccount(db.Model):    # type: ignore
    """An account. Usernames are unique."""

    __tablename__ = 'accounts'

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    password = Column(String(60), nullable=False)
    """bcrypt hash."""

    organization_id = Column(ForeignKey('organizations.organization_id'),
                             nullable=False, index=True)
    created = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    organization = relationship('DBOrganization')


class MediaMixin(object):
    """Columns shared by the image and video tables."""

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    link = Column(String(2048), nullable=False)
    mimetype = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)
    created = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @declared_attr
    def organization_id(cls):    # type: ignore
        return Column(ForeignKey('organizations.organization_id'),
                      nullable=False, index=True)


class DBImage(MediaMixin, db.Model):    # type: ignore
    """An uploaded image (or document)."""

    __tablename__ = 'images'


class DBVideo(MediaMixin, db.Model):    # type: ignore
    """An uploaded video."""

    __tablename__ = 'videos'
