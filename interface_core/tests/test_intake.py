"""Tests for :mod:`interface_core.intake`."""

from io import BytesIO
from unittest import TestCase, mock
import re

from flask import Flask
from werkzeug.datastructures import FileStorage, MultiDict

from .. import domain, intake
from ..exceptions import SizeLimitError


def _part(filename, mimetype='image/png'):
    return FileStorage(stream=BytesIO(b'foo'), filename=filename,
                       content_type=mimetype)


class TestParseParts(TestCase):
    def test_multiple(self):
        parsed = intake.parse_parts(MultiDict([('files', _part('a.png')),
                                               ('files', _part('b.png'))]),
                                    10)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.MULTIPLE)
        self.assertEqual([p.filename for p in parsed.files],
                         ['a.png', 'b.png'])

    def test_single_fallback(self):
        """A lone ``file`` part falls back to the single-file layout."""
        parsed = intake.parse_parts(MultiDict([('file', _part('a.png'))]), 10)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.SINGLE)
        self.assertEqual(len(parsed.files), 1)

    def test_two_singles(self):
        parsed = intake.parse_parts(MultiDict([('file', _part('a.png')),
                                               ('file', _part('b.png'))]),
                                    10)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.FAILED)
        self.assertEqual(parsed.reason, intake.UNEXPECTED_FIELD)

    def test_mixed_fields(self):
        parsed = intake.parse_parts(MultiDict([('file', _part('a.png')),
                                               ('files', _part('b.png'))]),
                                    10)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.FAILED)

    def test_too_many(self):
        parts = MultiDict([('files', _part(f'{i}.png')) for i in range(3)])
        parsed = intake.parse_parts(parts, 2)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.FAILED)
        self.assertEqual(parsed.reason, 'Too many files. At most 2 files '
                                        'can be uploaded at once.')

    def test_empty_filenames_ignored(self):
        parsed = intake.parse_parts(MultiDict([('files', _part('')),
                                               ('files', _part('a.png'))]),
                                    10)
        self.assertEqual(parsed.outcome, intake.ParseOutcome.MULTIPLE)
        self.assertEqual(len(parsed.files), 1)


class TestMaxFiles(TestCase):
    def test_header(self):
        self.assertEqual(intake.max_files('3', 10), 3)
        self.assertEqual(intake.max_files(None, 10), 10)
        self.assertEqual(intake.max_files('lots', 10), 10)
        self.assertEqual(intake.max_files('0', 10), 10)
        self.assertEqual(intake.max_files('-4', 10), 10)


class TestObjectName(TestCase):
    def test_sanitized(self):
        name = intake.object_name('my phötö (1).png')
        self.assertRegex(name, r'^\d+-\d+-')
        self.assertTrue(name.endswith('-my_ph_t___1_.png'))
        self.assertIsNone(re.search(r'[^a-zA-Z0-9._-]', name))

    @mock.patch(f'{intake.__name__}.time')
    @mock.patch(f'{intake.__name__}.random')
    def test_layout(self, mock_random, mock_time):
        mock_time.time.return_value = 1700000000.123
        mock_random.randint.return_value = 42
        self.assertEqual(intake.object_name('a.png'),
                         '1700000000123-42-a.png')
        mock_random.randint.assert_called_once_with(0, 10 ** 9)


class TestTruncate(TestCase):
    def test_short_names_kept(self):
        self.assertEqual(intake.truncate('a.png', 10), 'a.png')

    def test_extension_kept(self):
        name = intake.truncate('x' * 300 + '.png', 200)
        self.assertEqual(len(name), 200)
        self.assertTrue(name.endswith('x.png'))

    def test_no_extension(self):
        self.assertEqual(intake.truncate('x' * 300, 200), 'x' * 200)

    def test_long_object_name(self):
        """Object names stay well inside the bucket's name limit."""
        name = intake.object_name('\u00e9' * 2000 + '.mp4')
        self.assertLess(len(name.encode('utf-8')), 1024)
        self.assertTrue(name.endswith('_.mp4'))

    def test_title(self):
        self.assertEqual(len(intake.title('t' * 1000 + '.png')),
                         intake.MAX_TITLE_LENGTH)
        self.assertEqual(intake.title(None), '')


class TestCappedSpool(TestCase):
    def test_exactly_at_limit(self):
        spool = intake.CappedSpool(BytesIO(), 10, 'too big')
        spool.write(b'x' * 6)
        spool.write(b'x' * 4)
        spool.seek(0)
        self.assertEqual(spool.read(), b'x' * 10)

    def test_one_byte_over(self):
        """The chunk that crosses the limit is refused and not written."""
        buffer = BytesIO()
        spool = intake.CappedSpool(buffer, 10, 'too big')
        spool.write(b'x' * 10)
        with self.assertRaises(SizeLimitError) as e:
            spool.write(b'x')
        self.assertEqual(e.exception.description, 'too big')
        self.assertEqual(buffer.getvalue(), b'x' * 10)


class TestPolicy(TestCase):
    def setUp(self):
        self.app = Flask('test')
        self.app.config.update({
            'IMAGE_UPLOAD_MAX_BYTES': 15 * 1024 * 1024,
            'IMAGE_UPLOAD_MIMETYPES': ['image/jpeg', ' image/PNG', ''],
            'VIDEO_UPLOAD_MAX_BYTES': 400 * 1024 * 1024,
            'VIDEO_UPLOAD_MIMETYPES': ['video/mp4'],
        })

    def test_image_policy(self):
        with self.app.app_context():
            policy = intake.get_policy(domain.MediaKind.IMAGE)
        self.assertEqual(policy.allowed_types, ['image/jpeg', 'image/png'])
        self.assertEqual(policy.max_size_display, '15MB')
        self.assertEqual(policy.allowed_types_display, 'JPEG, PNG')
        self.assertTrue(intake.is_allowed(_part('a.png', 'image/png'),
                                          policy))
        self.assertFalse(intake.is_allowed(_part('a.mp4', 'video/mp4'),
                                           policy))

    def test_video_policy(self):
        with self.app.app_context():
            policy = intake.get_policy(domain.MediaKind.VIDEO)
        self.assertEqual(policy.max_size_display, '400MB')
        self.assertEqual(policy.allowed_types_display, 'MP4')
