"""Utility functions for working with cache keys.

These functions are designed to integrate with a cache backend using
Django's cache framework, creating keys unique to the install that fit
within the constraints of common cache servers.
"""

from __future__ import annotations

import hashlib
import re

from django.conf import settings
from django.contrib.sites.models import Site


#: The maximum length of a generated key.
#:
#: memcached's limit is typically 250 bytes. This leaves room for the
#: prefixes Django's cache framework adds.
MAX_KEY_SIZE = 240

_INVALID_KEY_CHARS_RE = re.compile(r'[\x00-\x20\x7f]')


def make_cache_key(
    key: str,
) -> str:
    """Create a cache key guaranteed to avoid conflicts and size limits.

    The cache key will be prefixed by the site's domain, and will be
    shortened with a SHA256 digest if it's larger than the maximum key size.
    Characters not compatible with the cache backend are escaped.

    Args:
        key (str):
            The base key to generate a cache key from.

    Returns:
        str:
        A cache key suitable for use with the cache backend.
    """
    try:
        site = Site.objects.get_current()

        # The install has a Site app, so prefix the domain to the key.
        # If a SITE_ROOT is defined, also include that, to allow for multiple
        # instances on the same host.
        site_root = getattr(settings, 'SITE_ROOT', None)

        if site_root:
            key = f'{site.domain}:{site_root}:{key}'
        else:
            key = f'{site.domain}:{key}'
    except Exception:
        # The install doesn't have a Site app, so use the key as-is.
        pass

    key = _INVALID_KEY_CHARS_RE.sub(lambda m: '\\x%02x' % ord(m.group(0)),
                                    key)

    if len(key) > MAX_KEY_SIZE:
        digest = hashlib.sha256(key.encode('utf-8')).hexdigest()

        # Replace the excess part of the key with a digest of the key.
        key = key[:MAX_KEY_SIZE - len(digest)] + digest

    return key
