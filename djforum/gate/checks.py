"""Checks run by the request gate before a forum view.

Each check receives the warnings pending when the gate started, and skips
queuing a warning whose kind is already among them. A check either returns
a response, which stops the request, or ``None`` to let it continue.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

from django.http import HttpResponseRedirect
from django.urls import reverse

from djforum.accounts.capabilities import CAPABILITY_ADMIN
from djforum.notices.channel import is_pending
from djforum.notices.kinds import NoticeKind
from djforum.util.versions import compare_versions

if TYPE_CHECKING:
    from django.http import HttpRequest

    from djforum.accounts.capabilities import BaseCapabilityChecker
    from djforum.accounts.resolvers import ForumUserStore
    from djforum.config.forumconfig import ForumConfig
    from djforum.notices.channel import BaseNoticeChannel, PendingNotice


logger = logging.getLogger(__name__)


#: The URL name of the maintenance page.
MAINTENANCE_ACTION = 'maintenance'

#: The URL name of the page shown to banned users.
BAN_ACTION = 'ban'

#: URL names that stay reachable during maintenance.
MAINTENANCE_EXEMPT_ACTIONS = {MAINTENANCE_ACTION, BAN_ACTION}


class MaintenanceCheck:
    """Sends users to the maintenance page while the forum is in maintenance.

    Administrators are let through, and everyone is warned that maintenance
    mode is on. The maintenance and ban pages stay reachable, so banned
    users aren't bounced between the two.
    """

    def __init__(
        self,
        config: ForumConfig,
        notices: BaseNoticeChannel,
        capabilities: BaseCapabilityChecker,
    ) -> None:
        self.config = config
        self.notices = notices
        self.capabilities = capabilities

    def check(
        self,
        request: HttpRequest,
        action_id: Optional[str],
        pending: Sequence[PendingNotice],
    ) -> Optional[HttpResponseRedirect]:
        """Run the check.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            action_id (str):
                The URL name of the view being requested.

            pending (list of djforum.notices.channel.PendingNotice):
                The warnings pending when the gate started.

        Returns:
            django.http.HttpResponseRedirect:
            A redirect to the maintenance page, or ``None`` to continue.
        """
        if self.config.get('maintenance_mode') != '1':
            return None

        if action_id in MAINTENANCE_EXEMPT_ACTIONS:
            return None

        if not is_pending(pending, NoticeKind.MAINTENANCE):
            self.notices.warning(NoticeKind.MAINTENANCE, autoclose=False)

        if self.capabilities.has(request.user, CAPABILITY_ADMIN):
            return None

        logger.debug('Redirecting %s to the maintenance page',
                     request.user,
                     extra={'request': request})

        return HttpResponseRedirect(reverse('djforum:maintenance'))


class MissingEmailCheck:
    """Warns users who haven't set an e-mail address.

    This never stops the request.
    """

    def __init__(
        self,
        notices: BaseNoticeChannel,
        user_store: ForumUserStore,
    ) -> None:
        self.notices = notices
        self.user_store = user_store

    def check(
        self,
        request: HttpRequest,
        pending: Sequence[PendingNotice],
    ) -> None:
        """Run the check.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            pending (list of djforum.notices.channel.PendingNotice):
                The warnings pending when the gate started.
        """
        if is_pending(pending, NoticeKind.MISSING_EMAIL):
            return

        forum_user = self.user_store.find_current(request)

        if forum_user is not None and not getattr(forum_user, 'email', None):
            self.notices.warning(NoticeKind.MISSING_EMAIL, autoclose=False)


class VersionSkewCheck:
    """Warns when the code and database versions differ.

    If the code is newer, the database needs an upgrade. If the database is
    newer, the installed code is out of date. This never stops the request.
    """

    def __init__(
        self,
        config: ForumConfig,
        notices: BaseNoticeChannel,
        module_version: str,
    ) -> None:
        self.config = config
        self.notices = notices
        self.module_version = module_version

    def check(
        self,
        request: HttpRequest,
        pending: Sequence[PendingNotice],
    ) -> None:
        """Run the check.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            pending (list of djforum.notices.channel.PendingNotice):
                The warnings pending when the gate started.
        """
        if is_pending(pending,
                      NoticeKind.DATABASE_UPGRADE,
                      NoticeKind.DATABASE_NEWER):
            return

        db_version = self.config.get('version')
        result = compare_versions(self.module_version, db_version)

        if result > 0:
            self.notices.warning(NoticeKind.DATABASE_UPGRADE,
                                 autoclose=False)
        elif result < 0:
            logger.warning('Forum code version %s is older than database '
                           'version %s',
                           self.module_version, db_version)
            self.notices.warning(NoticeKind.DATABASE_NEWER, autoclose=False)
