"""Resolution of forum users from host application identities.

A deployment chooses where forum identities come from with the
``DJFORUM_USER_MODE`` setting:

``'inherit'`` (default):
    The host application owns authentication. Each host user gets a
    separate :py:class:`~djforum.accounts.models.ForumUser`, linked through
    ``inherited_id`` and created on the user's first forum request.

``'own'``:
    The forum owns its identity store, and ``request.user`` already is the
    forum identity (for instance, through ``AUTH_USER_MODEL``).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import transaction

from djforum.accounts.models import ForumUser

if TYPE_CHECKING:
    from django.http import HttpRequest


logger = logging.getLogger(__name__)


#: Forum identities are derived from host application users.
USER_INHERIT = 'inherit'

#: The forum owns its identity store.
USER_OWN = 'own'

_USER_MODES = (USER_INHERIT, USER_OWN)

_REQUEST_CACHE_ATTR = '_djforum_forum_user'
_IDENTITY_CACHE_ATTR = '_djforum_resolved_forum_user'


def get_user_mode() -> str:
    """Return the configured user mode.

    Returns:
        str:
        Either :py:data:`USER_INHERIT` or :py:data:`USER_OWN`.

    Raises:
        django.core.exceptions.ImproperlyConfigured:
            ``settings.DJFORUM_USER_MODE`` has an unsupported value.
    """
    mode = getattr(settings, 'DJFORUM_USER_MODE', USER_INHERIT)

    if mode not in _USER_MODES:
        raise ImproperlyConfigured(
            'settings.DJFORUM_USER_MODE must be one of %s, not "%s".'
            % (', '.join('"%s"' % m for m in _USER_MODES), mode))

    return mode


class ForumUserStore:
    """Looks up and creates forum users.

    Lookups of the current user are remembered on the request, so each
    request queries the database at most once.
    """

    def __init__(
        self,
        user_mode: Optional[str] = None,
    ) -> None:
        """Initialize the store.

        Args:
            user_mode (str, optional):
                The user mode. Defaults to :py:func:`get_user_mode`.
        """
        self.user_mode = user_mode or get_user_mode()

    @property
    def inherits_users(self) -> bool:
        """Whether forum users are derived from host users."""
        return self.user_mode == USER_INHERIT

    def resolve_identity(self, identity) -> Optional[Any]:
        """Return the forum user for a host identity.

        The forum user found for a host identity is kept on the identity,
        so later lookups for the same identity object don't query again.

        Args:
            identity (django.contrib.auth.models.User):
                The host identity, usually ``request.user``.

        Returns:
            object:
            The :py:class:`~djforum.accounts.models.ForumUser` when
            inheriting users, the identity itself when the forum owns its
            identities, or ``None`` for anonymous users or host users
            without a forum account.
        """
        if identity is None or not identity.is_authenticated:
            return None

        if not self.inherits_users:
            return identity

        try:
            return getattr(identity, _IDENTITY_CACHE_ATTR)
        except AttributeError:
            pass

        forum_user = self.find_by_host_id(identity.pk)

        if forum_user is not None:
            setattr(identity, _IDENTITY_CACHE_ATTR, forum_user)

        return forum_user

    def find_current(
        self,
        request: HttpRequest,
    ) -> Optional[Any]:
        """Return the forum user making a request.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

        Returns:
            object:
            The forum user, or ``None``. See :py:meth:`resolve_identity`.
        """
        try:
            return getattr(request, _REQUEST_CACHE_ATTR)
        except AttributeError:
            pass

        forum_user = self.resolve_identity(getattr(request, 'user', None))

        if forum_user is not None:
            self.remember(request, forum_user)

        return forum_user

    def remember(
        self,
        request: HttpRequest,
        forum_user,
    ) -> None:
        """Remember the forum user for the rest of a request.

        When inheriting users, the forum user is also kept on
        ``request.user``, so capability checks for it don't query again.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            forum_user (object):
                The forum user making the request.
        """
        setattr(request, _REQUEST_CACHE_ATTR, forum_user)

        user = getattr(request, 'user', None)

        if (self.inherits_users and
            forum_user is not None and
            user is not None and
            user.is_authenticated):
            setattr(user, _IDENTITY_CACHE_ATTR, forum_user)

    def find_by_host_id(
        self,
        host_id: int,
    ) -> Optional[ForumUser]:
        """Return the forum user linked to a host user.

        Args:
            host_id (int):
                The ID of the host application user.

        Returns:
            djforum.accounts.models.ForumUser:
            The forum user, or ``None`` if there isn't one.
        """
        return ForumUser.objects.get_for_host_id(host_id)

    def create(
        self,
        scenario: Optional[str] = None,
        **fields,
    ) -> ForumUser:
        """Validate and save a new forum user.

        The user is saved in its own savepoint, so a failure leaves any
        surrounding transaction usable.

        Args:
            scenario (str, optional):
                The validation scenario to apply.

            **fields (dict):
                Field values for the new user.

        Returns:
            djforum.accounts.models.ForumUser:
            The saved forum user.

        Raises:
            django.core.exceptions.ValidationError:
                The fields failed validation.

            django.db.IntegrityError:
                A constraint was violated, such as another forum user
                already being linked to the same host user.

            django.db.DatabaseError:
                The user could not be saved.
        """
        forum_user = ForumUser(**fields)
        forum_user.validate_for_scenario(scenario)

        with transaction.atomic():
            forum_user.save(force_insert=True)

        logger.debug('Created forum user ID %s (host user ID %s)',
                     forum_user.pk, forum_user.inherited_id)

        return forum_user
