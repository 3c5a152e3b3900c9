"""Cross-process state synchronization through the cache."""

from __future__ import annotations

import logging
import time
from typing import Optional

from django.core.cache import cache

from djforum.cache.backend import make_cache_key


logger = logging.getLogger(__name__)


class GenerationSynchronizer:
    """Tracks a shared generation number for some piece of process state.

    Every process holding a copy of shared state (such as the forum
    configuration) creates a synchronizer with the same cache key. When one
    process changes the state, it calls :py:meth:`mark_updated`, bumping the
    generation stored in the cache. Other processes notice through
    :py:meth:`is_expired` that their copy is stale, reload it, and call
    :py:meth:`refresh`.

    Cache failures never propagate. They're logged, and the state is
    considered expired, so callers fall back to reloading from the
    database.
    """

    ######################
    # Instance variables #
    ######################

    #: The normalized cache key holding the generation number.
    cache_key: str

    #: The generation number this instance last saw.
    sync_gen: Optional[int]

    def __init__(
        self,
        cache_key: str,
        *,
        normalize_cache_key: bool = True,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            cache_key (str):
                The base cache key for the generation number.

            normalize_cache_key (bool, optional):
                Whether to pass the key through
                :py:func:`~djforum.cache.backend.make_cache_key`.
        """
        if normalize_cache_key:
            cache_key = make_cache_key(cache_key)

        self.cache_key = cache_key
        self.sync_gen = None

        try:
            self._load_or_seed()
        except Exception as e:
            logger.exception('Could not read generation key "%s" from the '
                             'cache: %s',
                             cache_key, e)

    def is_expired(self) -> bool:
        """Return whether another process has changed the state.

        Returns:
            bool:
            ``True`` if this instance's generation is stale or unknown.
        """
        try:
            latest = self._get_latest_sync_gen()
        except Exception as e:
            logger.exception('Could not check generation key "%s" for '
                             'expiration: %s',
                             self.cache_key, e)
            return True

        return latest is None or latest != self.sync_gen

    def refresh(self) -> None:
        """Adopt the latest generation from the cache."""
        try:
            self._load_or_seed()
        except Exception as e:
            logger.exception('Could not refresh generation key "%s": %s',
                             self.cache_key, e)

    def clear(self) -> None:
        """Remove the generation from the cache, expiring every process."""
        try:
            cache.delete(self.cache_key)
        except Exception as e:
            logger.exception('Could not clear generation key "%s": %s',
                             self.cache_key, e)

    def mark_updated(self) -> None:
        """Bump the generation, expiring every other process's state."""
        try:
            try:
                self.sync_gen = cache.incr(self.cache_key)
            except ValueError:
                # The key vanished from the cache. Start a new generation.
                self._load_or_seed()
        except Exception as e:
            logger.exception('Could not bump generation key "%s": %s',
                             self.cache_key, e)

    def _load_or_seed(self) -> None:
        """Load the stored generation, seeding one if none is stored."""
        seed = int(time.time())

        try:
            added = cache.add(self.cache_key, seed)
        except Exception:
            self.sync_gen = seed
            raise

        if added:
            self.sync_gen = seed
        else:
            self.sync_gen = self._get_latest_sync_gen()

    def _get_latest_sync_gen(self) -> Optional[int]:
        """Return the generation currently stored in the cache."""
        return cache.get(self.cache_key)
