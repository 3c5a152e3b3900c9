"""The request gate run before forum views."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import pytz
from django.http import HttpResponseRedirect
from django.urls import reverse
from django.utils import timezone

from djforum import get_schema_version
from djforum.accounts.capabilities import get_capability_checker
from djforum.accounts.provisioning import provision_forum_user
from djforum.accounts.resolvers import ForumUserStore
from djforum.config.forumconfig import ForumConfig
from djforum.gate.checks import (BAN_ACTION,
                                 MaintenanceCheck,
                                 MissingEmailCheck,
                                 VersionSkewCheck)
from djforum.notices.channel import MessagesNoticeChannel

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

    from djforum.accounts.capabilities import BaseCapabilityChecker
    from djforum.notices.channel import BaseNoticeChannel


logger = logging.getLogger(__name__)


#: The request attribute set when the gate activates a time zone.
TIMEZONE_ACTIVATED_ATTR = '_djforum_timezone_activated'


class RequestGate:
    """Decides whether a request may reach a forum view.

    The gate runs in two steps:

    1. :py:meth:`init` makes sure the requesting user has a forum account,
       turns banned users away, and activates the user's time zone.

    2. :py:meth:`before_action` runs the maintenance, missing e-mail and
       version skew checks, in that order.

    Either step may return a response (a redirect), in which case nothing
    after it runs, including the view.
    """

    def __init__(
        self,
        config: ForumConfig,
        notices: BaseNoticeChannel,
        user_store: ForumUserStore,
        capabilities: BaseCapabilityChecker,
        module_version: Optional[str] = None,
    ) -> None:
        """Initialize the gate.

        Args:
            config (djforum.config.forumconfig.ForumConfig):
                The forum configuration.

            notices (djforum.notices.channel.BaseNoticeChannel):
                The channel for notices shown to the user.

            user_store (djforum.accounts.resolvers.ForumUserStore):
                The store for looking up and creating forum users.

            capabilities (djforum.accounts.capabilities.
                          BaseCapabilityChecker):
                The checker for user capabilities.

            module_version (str, optional):
                The schema version the code expects. Defaults to
                :py:func:`djforum.get_schema_version`.
        """
        self.config = config
        self.notices = notices
        self.user_store = user_store
        self.capabilities = capabilities
        self.module_version = module_version or get_schema_version()

        self.maintenance_check = MaintenanceCheck(config=config,
                                                  notices=notices,
                                                  capabilities=capabilities)
        self.email_check = MissingEmailCheck(notices=notices,
                                             user_store=user_store)
        self.version_check = VersionSkewCheck(
            config=config,
            notices=notices,
            module_version=self.module_version)

    @classmethod
    def for_request(
        cls,
        request: HttpRequest,
    ) -> RequestGate:
        """Return a gate using the standard collaborators for a request.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

        Returns:
            RequestGate:
            The new gate.
        """
        user_store = ForumUserStore()

        return cls(config=ForumConfig.get_instance(),
                   notices=MessagesNoticeChannel(request),
                   user_store=user_store,
                   capabilities=get_capability_checker(user_store))

    def init(
        self,
        request: HttpRequest,
        action_id: Optional[str] = None,
    ) -> Optional[HttpResponse]:
        """Prepare the requesting user's forum identity.

        Anonymous requests pass through untouched.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            action_id (str, optional):
                The URL name of the view being requested.

        Returns:
            django.http.HttpResponse:
            A redirect to the ban page for banned users, or ``None`` to
            continue.

        Raises:
            djforum.accounts.errors.ForumUserProvisioningError:
                A forum account could not be created for the user.
        """
        if not request.user.is_authenticated:
            return None

        if self.user_store.inherits_users:
            forum_user = provision_forum_user(request=request,
                                              user_store=self.user_store,
                                              notices=self.notices)
            self.user_store.remember(request, forum_user)

            if forum_user.is_banned and action_id != BAN_ACTION:
                logger.info('Redirecting banned forum user ID %s to the '
                            'ban page',
                            forum_user.pk,
                            extra={'request': request})

                return HttpResponseRedirect(reverse('djforum:ban'))
        else:
            forum_user = request.user

        self._activate_timezone(request, getattr(forum_user, 'timezone',
                                                 None))

        return None

    def before_action(
        self,
        request: HttpRequest,
        action_id: Optional[str],
    ) -> Optional[HttpResponse]:
        """Run the checks that guard a forum view.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            action_id (str):
                The URL name of the view being requested.

        Returns:
            django.http.HttpResponse:
            A redirect, if a check stopped the request, or ``None`` to let
            the view run.
        """
        pending = self.notices.get_pending_warnings()

        response = self.maintenance_check.check(request, action_id, pending)

        if response is not None:
            return response

        self.email_check.check(request, pending)
        self.version_check.check(request, pending)

        return None

    def _activate_timezone(
        self,
        request: HttpRequest,
        tz_name: Optional[str],
    ) -> None:
        """Activate the user's time zone for the rest of the request.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            tz_name (str):
                The name of the user's time zone, if any.
        """
        if not tz_name:
            return

        try:
            tz = pytz.timezone(tz_name)
        except pytz.UnknownTimeZoneError:
            logger.warning('Ignoring unknown time zone "%s" for user %s',
                           tz_name, request.user,
                           extra={'request': request})
            return

        timezone.activate(tz)
        setattr(request, TIMEZONE_ACTIVATED_ATTR, True)
