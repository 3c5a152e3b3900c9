"""Automatic creation of forum accounts for host application users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError

from djforum.accounts.errors import ForumUserProvisioningError
from djforum.accounts.models import ForumUser
from djforum.cache.invalidation import clear_after
from djforum.log import log_audit
from djforum.notices.kinds import NoticeKind

if TYPE_CHECKING:
    from django.http import HttpRequest

    from djforum.accounts.resolvers import ForumUserStore
    from djforum.notices.channel import BaseNoticeChannel


logger = logging.getLogger(__name__)


#: The origin recorded in the audit log for created accounts.
PROVISIONING_ORIGIN = '%s.provision_forum_user' % __name__


def provision_forum_user(
    request: HttpRequest,
    user_store: ForumUserStore,
    notices: BaseNoticeChannel,
) -> ForumUser:
    """Return the forum user for the requesting host user, creating it if new.

    A new account is active, has the member role and the default time zone,
    and is validated in the installation scenario. Once it's saved, the
    user is told about it, member caches are cleared and the creation is
    audited.

    If a concurrent request creates the account first, the unique host
    user link rejects this one, and the account that request created is
    returned instead.

    Args:
        request (django.http.HttpRequest):
            The HTTP request from an authenticated host user.

        user_store (djforum.accounts.resolvers.ForumUserStore):
            The store used to look up and create forum users.

        notices (djforum.notices.channel.BaseNoticeChannel):
            The channel used to tell the user about a new account.

    Returns:
        djforum.accounts.models.ForumUser:
        The existing or new forum user.

    Raises:
        djforum.accounts.errors.ForumUserProvisioningError:
            The account could not be created. The forum can't run with the
            current configuration.
    """
    host_id = request.user.pk
    forum_user = user_store.find_by_host_id(host_id)

    if forum_user is not None:
        return forum_user

    try:
        forum_user = user_store.create(
            scenario=ForumUser.SCENARIO_INSTALLATION,
            inherited_id=host_id,
            status=ForumUser.STATUS_ACTIVE,
            role=ForumUser.ROLE_MEMBER,
            timezone=ForumUser.DEFAULT_TIMEZONE)
    except IntegrityError as e:
        forum_user = user_store.find_by_host_id(host_id)

        if forum_user is None:
            logger.exception('Unable to create forum user for host user '
                             'ID %s: %s',
                             host_id, e,
                             extra={'request': request})
            raise ForumUserProvisioningError(host_id, e) from e

        logger.info('Forum user ID %s for host user ID %s was created by '
                    'another request',
                    forum_user.pk, host_id,
                    extra={'request': request})

        return forum_user
    except (DatabaseError, ValidationError) as e:
        logger.exception('Unable to create forum user for host user ID %s: '
                         '%s',
                         host_id, e,
                         extra={'request': request})
        raise ForumUserProvisioningError(host_id, e) from e

    notices.success(NoticeKind.ACCOUNT_CREATED, autoclose=False)
    clear_after('activate')
    log_audit('Inherited account created',
              subject_id=forum_user.pk,
              origin=PROVISIONING_ORIGIN,
              request=request)

    return forum_user
