"""Unit tests for djforum.cache.synchronizer.GenerationSynchronizer."""

from __future__ import annotations

import kgb
from django.core.cache import cache

from djforum.cache.synchronizer import GenerationSynchronizer
from djforum.testing.testcases import TestCase


class GenerationSynchronizerTests(kgb.SpyAgency, TestCase):
    """Unit tests for djforum.cache.synchronizer.GenerationSynchronizer."""

    def setUp(self) -> None:
        super().setUp()

        cache.clear()
        self.gen_sync = GenerationSynchronizer('test-synchronizer')

    def test_initial_state(self) -> None:
        """Testing GenerationSynchronizer initial state"""
        self.assertIsNotNone(self.gen_sync.sync_gen)
        self.assertEqual(self.gen_sync.cache_key,
                         'example.com:test-synchronizer')

    def test_init_with_existing_generation(self) -> None:
        """Testing GenerationSynchronizer initial state with a generation
        already in the cache
        """
        other = GenerationSynchronizer('test-synchronizer')

        self.assertEqual(other.sync_gen, self.gen_sync.sync_gen)

    def test_is_expired_when_expired(self) -> None:
        """Testing GenerationSynchronizer.is_expired when expired"""
        cache.set(self.gen_sync.cache_key, self.gen_sync.sync_gen + 1)

        self.assertTrue(self.gen_sync.is_expired())

    def test_is_expired_when_not_expired(self) -> None:
        """Testing GenerationSynchronizer.is_expired when not expired"""
        self.assertFalse(self.gen_sync.is_expired())

    def test_is_expired_when_cleared(self) -> None:
        """Testing GenerationSynchronizer.is_expired after clear"""
        self.gen_sync.clear()

        self.assertTrue(self.gen_sync.is_expired())

    def test_is_expired_with_exception(self) -> None:
        """Testing GenerationSynchronizer.is_expired when the cache raises
        an exception
        """
        self.spy_on(self.gen_sync._get_latest_sync_gen,
                    op=kgb.SpyOpRaise(Exception('Oh no')))

        with self.assertLogs('djforum.cache.synchronizer') as logs:
            self.assertTrue(self.gen_sync.is_expired())

        self.assertEqual(len(logs.output), 1)
        self.assertIn('Could not check generation key '
                      '"example.com:test-synchronizer" for expiration: '
                      'Oh no',
                      logs.output[0])

    def test_refresh(self) -> None:
        """Testing GenerationSynchronizer.refresh"""
        new_sync_gen = self.gen_sync.sync_gen + 1
        cache.set(self.gen_sync.cache_key, new_sync_gen)

        self.gen_sync.refresh()

        self.assertEqual(self.gen_sync.sync_gen, new_sync_gen)
        self.assertFalse(self.gen_sync.is_expired())

    def test_mark_updated(self) -> None:
        """Testing GenerationSynchronizer.mark_updated"""
        other = GenerationSynchronizer('test-synchronizer')
        sync_gen = self.gen_sync.sync_gen

        self.gen_sync.mark_updated()

        self.assertEqual(self.gen_sync.sync_gen, sync_gen + 1)
        self.assertEqual(cache.get(self.gen_sync.cache_key), sync_gen + 1)
        self.assertFalse(self.gen_sync.is_expired())
        self.assertTrue(other.is_expired())

    def test_mark_updated_after_clear(self) -> None:
        """Testing GenerationSynchronizer.mark_updated after the key was
        removed from the cache
        """
        self.gen_sync.clear()
        self.gen_sync.mark_updated()

        self.assertIsNotNone(cache.get(self.gen_sync.cache_key))
        self.assertFalse(self.gen_sync.is_expired())
