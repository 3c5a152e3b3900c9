"""Capability checks for forum identities.

The gate and views ask a capability checker whether an identity may do
something, rather than inspecting roles directly. The checker used is set
with ``settings.DJFORUM_CAPABILITY_CHECKER`` (an import path to a
:py:class:`BaseCapabilityChecker` subclass), defaulting to
:py:class:`RoleCapabilityChecker`.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from django.conf import settings
from django.utils.module_loading import import_string

from djforum.accounts.models import ForumUser
from djforum.accounts.resolvers import ForumUserStore


logger = logging.getLogger(__name__)


#: Full administration of the forum.
CAPABILITY_ADMIN = 'admin'

#: Moderation of forum content.
CAPABILITY_MODERATOR = 'moderator'

#: Participation in the forum.
CAPABILITY_MEMBER = 'member'

DEFAULT_CAPABILITY_CHECKER = \
    'djforum.accounts.capabilities.RoleCapabilityChecker'


class BaseCapabilityChecker:
    """Base class for capability checkers."""

    def has(self, identity, capability: str) -> bool:
        """Return whether an identity carries a capability.

        Args:
            identity (django.contrib.auth.models.User):
                The host identity, usually ``request.user``.

            capability (str):
                The capability to check, such as :py:data:`CAPABILITY_ADMIN`.

        Returns:
            bool:
            ``True`` if the identity carries the capability.
        """
        raise NotImplementedError


class RoleCapabilityChecker(BaseCapabilityChecker):
    """Grants capabilities based on forum user roles.

    Host superusers carry every capability. Other identities carry a
    capability when their forum user's role is at least the role mapped to
    it.
    """

    #: The minimum role needed for each capability.
    capability_roles: Dict[str, int] = {
        CAPABILITY_ADMIN: ForumUser.ROLE_ADMIN,
        CAPABILITY_MODERATOR: ForumUser.ROLE_MODERATOR,
        CAPABILITY_MEMBER: ForumUser.ROLE_MEMBER,
    }

    def __init__(
        self,
        user_store: Optional[ForumUserStore] = None,
    ) -> None:
        """Initialize the checker.

        Args:
            user_store (djforum.accounts.resolvers.ForumUserStore, optional):
                The store used to look up forum users.
        """
        self.user_store = user_store or ForumUserStore()

    def has(self, identity, capability: str) -> bool:
        """Return whether an identity carries a capability.

        Args:
            identity (django.contrib.auth.models.User):
                The host identity, usually ``request.user``.

            capability (str):
                The capability to check.

        Returns:
            bool:
            ``True`` if the identity carries the capability.
        """
        if identity is None or not identity.is_authenticated:
            return False

        if getattr(identity, 'is_superuser', False):
            return True

        try:
            required_role = self.capability_roles[capability]
        except KeyError:
            logger.warning('Unknown forum capability "%s" checked for %r',
                           capability, identity)
            return False

        forum_user = self.user_store.resolve_identity(identity)
        role = getattr(forum_user, 'role', None)

        return role is not None and role >= required_role


def get_capability_checker(
    user_store: Optional[ForumUserStore] = None,
) -> BaseCapabilityChecker:
    """Return the configured capability checker.

    Args:
        user_store (djforum.accounts.resolvers.ForumUserStore, optional):
            The store passed to :py:class:`RoleCapabilityChecker` subclasses.

    Returns:
        BaseCapabilityChecker:
        A new capability checker.
    """
    checker_cls = import_string(getattr(settings,
                                        'DJFORUM_CAPABILITY_CHECKER',
                                        DEFAULT_CAPABILITY_CHECKER))

    if issubclass(checker_cls, RoleCapabilityChecker):
        return checker_cls(user_store=user_store)

    return checker_cls()
