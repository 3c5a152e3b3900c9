"""Unit tests for djforum.cache.invalidation."""

from __future__ import annotations

from django.core.cache import cache

from djforum.cache import invalidation
from djforum.cache.backend import make_cache_key
from djforum.cache.invalidation import (MEMBERS_COUNT_KEY,
                                        MEMBERS_FIELDLIST_KEY,
                                        MODERATORS_KEY,
                                        clear_after,
                                        get_cache_event_keys,
                                        register_cache_event)
from djforum.testing.testcases import TestCase


class ClearAfterTests(TestCase):
    """Unit tests for djforum.cache.invalidation.clear_after."""

    def setUp(self) -> None:
        super().setUp()

        cache.clear()

        for key in (MEMBERS_COUNT_KEY, MEMBERS_FIELDLIST_KEY,
                    MODERATORS_KEY):
            cache.set(make_cache_key(key), 'cached')

    def tearDown(self) -> None:
        invalidation._cache_events.pop('test-event', None)

        super().tearDown()

    def test_activate(self) -> None:
        """Testing clear_after('activate')"""
        clear_after('activate')

        self.assertIsNone(cache.get(make_cache_key(MEMBERS_COUNT_KEY)))
        self.assertIsNone(cache.get(make_cache_key(MEMBERS_FIELDLIST_KEY)))
        self.assertEqual(cache.get(make_cache_key(MODERATORS_KEY)), 'cached')

    def test_user_delete(self) -> None:
        """Testing clear_after('user_delete')"""
        clear_after('user_delete')

        self.assertIsNone(cache.get(make_cache_key(MEMBERS_COUNT_KEY)))
        self.assertIsNone(cache.get(make_cache_key(MEMBERS_FIELDLIST_KEY)))
        self.assertIsNone(cache.get(make_cache_key(MODERATORS_KEY)))

    def test_unknown_event(self) -> None:
        """Testing clear_after with an unregistered event"""
        with self.assertRaisesMessage(ValueError,
                                      '"bogus" is not a registered cache '
                                      'event.'):
            clear_after('bogus')

    def test_register_cache_event(self) -> None:
        """Testing register_cache_event"""
        register_cache_event('test-event', ['a', 'b'])
        register_cache_event('test-event', ['b', 'c'])

        self.assertEqual(get_cache_event_keys('test-event'), ['a', 'b', 'c'])

        cache.set(make_cache_key('c'), 1)
        clear_after('test-event')

        self.assertIsNone(cache.get(make_cache_key('c')))
