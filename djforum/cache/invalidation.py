"""Event-based invalidation of cached forum data.

Parts of the forum cache aggregate data (member counts, member field
lists, moderator lists) that become stale after certain events. Code that
causes such an event calls :py:func:`clear_after` with the event's name,
and every cache key registered for the event is deleted.

Example:
    .. code-block:: python

       from djforum.cache.invalidation import clear_after

       user.save()
       clear_after('activate')
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from django.core.cache import cache

from djforum.cache.backend import make_cache_key


logger = logging.getLogger(__name__)


#: Cache key for the list of member profile fields.
MEMBERS_FIELDLIST_KEY = 'djforum:members.fieldlist'

#: Cache key for the number of active members.
MEMBERS_COUNT_KEY = 'djforum:forum.memberscount'

#: Cache key for the list of forum moderators.
MODERATORS_KEY = 'djforum:forum.moderators'


_cache_events: Dict[str, List[str]] = {
    'activate': [
        MEMBERS_FIELDLIST_KEY,
        MEMBERS_COUNT_KEY,
    ],
    'ban': [
        MEMBERS_FIELDLIST_KEY,
    ],
    'user_delete': [
        MEMBERS_FIELDLIST_KEY,
        MEMBERS_COUNT_KEY,
        MODERATORS_KEY,
    ],
}


def register_cache_event(
    event: str,
    keys: Iterable[str],
) -> None:
    """Register cache keys to clear after an event.

    Keys are added to any already registered for the event.

    Args:
        event (str):
            The name of the event.

        keys (list of str):
            The unnormalized cache keys to delete when the event happens.
    """
    registered = _cache_events.setdefault(event, [])

    for key in keys:
        if key not in registered:
            registered.append(key)


def get_cache_event_keys(
    event: str,
) -> List[str]:
    """Return the cache keys registered for an event.

    Args:
        event (str):
            The name of the event.

    Returns:
        list of str:
        The unnormalized cache keys.

    Raises:
        ValueError:
            The event is not registered.
    """
    try:
        return list(_cache_events[event])
    except KeyError:
        raise ValueError('"%s" is not a registered cache event.' % event)


def clear_after(
    event: str,
) -> None:
    """Clear cached data made stale by an event.

    Args:
        event (str):
            The name of the event that just happened.

    Raises:
        ValueError:
            The event is not registered.
    """
    keys = get_cache_event_keys(event)

    cache.delete_many([
        make_cache_key(key)
        for key in keys
    ])

    logger.debug('Cleared cache keys %r after event "%s"', keys, event)
