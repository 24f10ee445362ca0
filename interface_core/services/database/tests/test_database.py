"""Tests for :mod:`interface_core.services.database`."""

from unittest import TestCase, mock

from sqlalchemy.exc import OperationalError

from ....factory import create_web_app
from .... import domain
from ... import database
from ...database import models
from ...exceptions import AccountExists, OrganizationExists, Unavailable


class DatabaseTestCase(TestCase):
    def setUp(self):
        self.app = create_web_app()
        self.context = self.app.app_context()
        self.context.push()
        database.create_all()

    def tearDown(self):
        database.drop_all()
        self.context.pop()


class TestOrganizationsAndAccounts(DatabaseTestCase):
    def test_create_and_get(self):
        """An account can be found by ID and by username."""
        org = database.create_organization('Foo Corp', 'Makes foo')
        account = database.create_account('foouser', 'hash',
                                          org.organization_id)

        self.assertEqual(database.get_organization(org.organization_id), org)
        self.assertEqual(database.get_organization_by_name('Foo Corp'), org)
        self.assertEqual(database.get_account(account.account_id), account)
        self.assertEqual(database.get_account_by_username('foouser'),
                         account)
        self.assertEqual(account.organization_id, org.organization_id)

    def test_get_credentials(self):
        org = database.create_organization('Foo Corp')
        database.create_account('foouser', 'hash', org.organization_id)
        account, password_hash = database.get_credentials('foouser')
        self.assertEqual(account.username, 'foouser')
        self.assertEqual(password_hash, 'hash')

    def test_missing(self):
        self.assertIsNone(database.get_account('123'))
        self.assertIsNone(database.get_account('not-an-id'))
        self.assertIsNone(database.get_account_by_username('nobody'))
        self.assertIsNone(database.get_credentials('nobody'))
        self.assertIsNone(database.get_organization('123'))
        self.assertIsNone(database.get_organization_by_name('Nobody Inc'))

    def test_duplicate_organization(self):
        database.create_organization('Foo Corp')
        with self.assertRaises(OrganizationExists):
            database.create_organization('Foo Corp')

    def test_duplicate_account(self):
        """The second account is refused; the first is untouched."""
        org = database.create_organization('Foo Corp')
        first = database.create_account('foouser', 'hash',
                                        org.organization_id)
        with self.assertRaises(AccountExists):
            database.create_account('foouser', 'otherhash',
                                    org.organization_id)
        self.assertEqual(database.get_credentials('foouser'),
                         (first, 'hash'))

    @mock.patch(f'{database.__name__}.db')
    def test_unavailable(self, mock_db):
        mock_db.session.get.side_effect = OperationalError('', {}, None)
        with self.assertRaises(Unavailable):
            database.get_account('1')


class TestModels(TestCase):
    def test_media_tables(self):
        """Image and video tables each reference their organization."""
        for model in (models.DBImage, models.DBVideo):
            column = model.__table__.c.organization_id
            self.assertFalse(column.nullable)
            self.assertEqual(
                [fk.target_fullname for fk in column.foreign_keys],
                ['organizations.organization_id']
            )
        self.assertEqual(models.DBImage.__tablename__, 'images')
        self.assertEqual(models.DBVideo.__tablename__, 'videos')


class TestMedia(DatabaseTestCase):
    def setUp(self):
        super(TestMedia, self).setUp()
        self.org = database.create_organization('Foo Corp')

    def _record(self, title: str) -> domain.MediaRecord:
        return domain.MediaRecord(
            title=title,
            link=f'https://storage.example.com/bucket/{title}',
            organization_id=self.org.organization_id,
            mimetype='image/png',
            size=123
        )

    def test_store_and_list(self):
        """Records come back in insertion order, per kind."""
        stored = database.store_media(domain.MediaKind.IMAGE,
                                      [self._record('a.png'),
                                       self._record('b.png')])
        self.assertEqual(len(stored), 2)
        self.assertTrue(all(record.record_id for record in stored))

        images = database.list_media(domain.MediaKind.IMAGE,
                                     self.org.organization_id)
        self.assertEqual([r.title for r in images], ['a.png', 'b.png'])
        self.assertEqual(images[0].size, 123)
        self.assertEqual(
            database.list_media(domain.MediaKind.VIDEO,
                                self.org.organization_id),
            []
        )

    def test_other_organization(self):
        other = database.create_organization('Bar Corp')
        database.store_media(domain.MediaKind.IMAGE, [self._record('a.png')])
        self.assertEqual(
            database.list_media(domain.MediaKind.IMAGE, other.organization_id),
            []
        )
