"""Unit tests for djforum.cache.backend."""

from __future__ import annotations

from djforum.cache.backend import MAX_KEY_SIZE, make_cache_key
from djforum.testing.testcases import TestCase


class MakeCacheKeyTests(TestCase):
    """Unit tests for djforum.cache.backend.make_cache_key."""

    def test_prefixes_domain(self) -> None:
        """Testing make_cache_key prefixes the site domain"""
        self.assertEqual(make_cache_key('test-key'), 'example.com:test-key')

    def test_with_site_root(self) -> None:
        """Testing make_cache_key with settings.SITE_ROOT"""
        with self.settings(SITE_ROOT='/forum/'):
            self.assertEqual(make_cache_key('test-key'),
                             'example.com:/forum/:test-key')

    def test_with_invalid_chars(self) -> None:
        """Testing make_cache_key escapes invalid characters"""
        self.assertEqual(make_cache_key('a b\tc'),
                         'example.com:a\\x20b\\x09c')

    def test_with_long_key(self) -> None:
        """Testing make_cache_key shortens long keys"""
        key = make_cache_key('x' * 500)

        self.assertEqual(len(key), MAX_KEY_SIZE)
        self.assertTrue(key.startswith('example.com:xxx'))
