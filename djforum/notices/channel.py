"""Queuing notices for the next rendered page.

Notices are stored through :py:mod:`django.contrib.messages`. The notice
kind and the autoclose flag travel in the message's ``extra_tags``, so
templates can style them and the gate can find pending notices by kind.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, TYPE_CHECKING

from django.contrib import messages
from django.contrib.messages.storage.base import BaseStorage

from djforum.notices.kinds import Notice, NoticeKind, build_notice

if TYPE_CHECKING:
    from django.http import HttpRequest


logger = logging.getLogger(__name__)


#: The prefix for the tag naming a notice's kind.
KIND_TAG_PREFIX = 'djforum-notice-'

#: The tag for notices the page may dismiss automatically.
AUTOCLOSE_TAG = 'autoclose'

#: The tag for notices that stay until the user dismisses them.
STICKY_TAG = 'sticky'


def get_notice_tags(notice: Notice) -> str:
    """Return the message tags for a notice.

    Args:
        notice (djforum.notices.kinds.Notice):
            The notice.

    Returns:
        str:
        The space-separated tags.
    """
    return '%s%s %s' % (KIND_TAG_PREFIX,
                        notice.kind.value,
                        AUTOCLOSE_TAG if notice.autoclose else STICKY_TAG)


def parse_notice_kind(extra_tags: Optional[str]) -> Optional[NoticeKind]:
    """Return the notice kind stored in a message's tags.

    Args:
        extra_tags (str):
            The message's ``extra_tags``.

    Returns:
        djforum.notices.kinds.NoticeKind:
        The notice kind, or ``None`` if the message isn't a forum notice.
    """
    for tag in (extra_tags or '').split():
        if tag.startswith(KIND_TAG_PREFIX):
            try:
                return NoticeKind(tag[len(KIND_TAG_PREFIX):])
            except ValueError:
                logger.debug('Ignoring unknown notice tag "%s"', tag)

    return None


def is_pending(
    pending: Sequence[PendingNotice],
    *kinds: NoticeKind,
) -> bool:
    """Return whether a notice of any of the given kinds is pending.

    Args:
        pending (list of PendingNotice):
            The pending notices.

        *kinds (tuple of djforum.notices.kinds.NoticeKind):
            The kinds to look for.

    Returns:
        bool:
        ``True`` if one of the kinds is pending.
    """
    return any(notice.kind in kinds for notice in pending)


class PendingNotice:
    """A notice already queued for display."""

    def __init__(
        self,
        kind: Optional[NoticeKind],
        message: str,
        level: int,
    ) -> None:
        self.kind = kind
        self.message = message
        self.level = level

    def __repr__(self):
        return '<PendingNotice(kind=%s, level=%s)>' % (
            self.kind and self.kind.value, self.level)


class BaseNoticeChannel:
    """Base class for a channel that queues notices for display."""

    def get_pending(self) -> List[PendingNotice]:
        """Return all pending notices, oldest first.

        Returns:
            list of PendingNotice:
            The pending notices.
        """
        raise NotImplementedError

    def queue(self, notice: Notice) -> None:
        """Queue a notice for display.

        Args:
            notice (djforum.notices.kinds.Notice):
                The notice to queue.
        """
        raise NotImplementedError

    def get_pending_warnings(self) -> List[PendingNotice]:
        """Return the pending warning notices, oldest first.

        Returns:
            list of PendingNotice:
            The pending warnings.
        """
        return [
            pending
            for pending in self.get_pending()
            if pending.level == messages.WARNING
        ]

    def has_pending(self, *kinds: NoticeKind) -> bool:
        """Return whether a warning of any of the given kinds is pending.

        Args:
            *kinds (tuple of djforum.notices.kinds.NoticeKind):
                The kinds to look for.

        Returns:
            bool:
            ``True`` if a warning of one of the kinds is pending.
        """
        return is_pending(self.get_pending_warnings(), *kinds)

    def warning(
        self,
        kind: NoticeKind,
        autoclose: bool = True,
    ) -> Notice:
        """Queue a warning notice of the given kind.

        Args:
            kind (djforum.notices.kinds.NoticeKind):
                The kind of notice.

            autoclose (bool, optional):
                Whether the page may dismiss the notice automatically.

        Returns:
            djforum.notices.kinds.Notice:
            The queued notice.
        """
        notice = build_notice(kind, level=messages.WARNING,
                              autoclose=autoclose)
        self.queue(notice)

        return notice

    def success(
        self,
        kind: NoticeKind,
        autoclose: bool = True,
    ) -> Notice:
        """Queue a success notice of the given kind.

        Args:
            kind (djforum.notices.kinds.NoticeKind):
                The kind of notice.

            autoclose (bool, optional):
                Whether the page may dismiss the notice automatically.

        Returns:
            djforum.notices.kinds.Notice:
            The queued notice.
        """
        notice = build_notice(kind, level=messages.SUCCESS,
                              autoclose=autoclose)
        self.queue(notice)

        return notice


class MessagesNoticeChannel(BaseNoticeChannel):
    """A notice channel backed by :py:mod:`django.contrib.messages`.

    Reading pending notices doesn't consume them. They're still shown on
    the next rendered page.
    """

    def __init__(
        self,
        request: HttpRequest,
    ) -> None:
        """Initialize the channel.

        Args:
            request (django.http.HttpRequest):
                The HTTP request whose message storage is used.
        """
        self.request = request

    def get_pending(self) -> List[PendingNotice]:
        """Return all pending notices, oldest first.

        This covers messages stored by earlier requests and messages queued
        during this one.

        Returns:
            list of PendingNotice:
            The pending notices.
        """
        storage = messages.get_messages(self.request)

        if not isinstance(storage, BaseStorage):
            # MessageMiddleware didn't run for this request.
            return []

        was_used = storage.used

        try:
            return [
                PendingNotice(kind=parse_notice_kind(message.extra_tags),
                              message=str(message.message),
                              level=message.level)
                for message in storage
            ]
        finally:
            # Iterating marks the messages as shown. Restore the flag so
            # they're still rendered.
            storage.used = was_used

    def queue(self, notice: Notice) -> None:
        """Queue a notice for display.

        Args:
            notice (djforum.notices.kinds.Notice):
                The notice to queue.
        """
        messages.add_message(self.request,
                             notice.level,
                             notice.message,
                             extra_tags=get_notice_tags(notice))
