"""The kinds of notices shown by the forum."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

from django.contrib import messages
from django.urls import reverse
from django.utils.html import format_html
from django.utils.safestring import SafeString
from django.utils.translation import gettext as _


class NoticeKind(Enum):
    """A kind of forum notice.

    Pending notices are compared by kind, so a notice's wording can change
    (or be translated) without breaking duplicate detection.
    """

    MAINTENANCE = 'maintenance'
    MISSING_EMAIL = 'missing-email'
    DATABASE_UPGRADE = 'database-upgrade'
    DATABASE_NEWER = 'database-newer'
    ACCOUNT_CREATED = 'account-created'


class Notice:
    """A message to show the user on the next rendered page."""

    def __init__(
        self,
        kind: NoticeKind,
        message: str,
        level: int = messages.WARNING,
        autoclose: bool = True,
    ) -> None:
        """Initialize the notice.

        Args:
            kind (NoticeKind):
                The kind of notice.

            message (str):
                The rendered message. This may contain HTML if marked safe.

            level (int, optional):
                The :py:mod:`django.contrib.messages` level.

            autoclose (bool, optional):
                Whether the page may dismiss the notice automatically.
        """
        self.kind = kind
        self.message = message
        self.level = level
        self.autoclose = autoclose

    def __eq__(self, other):
        return (isinstance(other, Notice) and
                self.kind == other.kind and
                self.level == other.level and
                self.message == other.message and
                self.autoclose == other.autoclose)

    def __repr__(self):
        return '<Notice(kind=%s, level=%s, autoclose=%s)>' % (
            self.kind.value, self.level, self.autoclose)


def _link(text: str, url_name: str) -> SafeString:
    return format_html('<a href="{}">{}</a>', reverse(url_name), text)


def _maintenance_message() -> SafeString:
    return format_html(
        _('The forum is currently in maintenance mode. All users without '
          'administrator privileges are redirected to {maintenance_page}. '
          'You can switch the mode off at {settings_page}.'),
        maintenance_page=_link(_('Maintenance page'), 'djforum:maintenance'),
        settings_page=_link(_('Settings page'), 'djforum:settings'))


def _missing_email_message() -> SafeString:
    return format_html(
        _('No e-mail address has been set for your account! Go to {link} '
          'to add one.'),
        link=_link('%s > %s' % (_('Profile'), _('Account Details')),
                   'djforum:profile-details'))


def _database_upgrade_message() -> SafeString:
    return format_html(
        _('It looks like there is a new version of the forum database! '
          '{link}'),
        link=_link(_('Update the forum'), 'djforum:level-up'))


def _database_newer_message() -> str:
    return _('Forum version appears to be older than the database! Please '
             'verify your database.')


def _account_created_message() -> SafeString:
    return format_html(
        _('Hey! Your new forum account has just been automatically '
          'created! Go to {link} to complement it.'),
        link=_link(_('Profile'), 'djforum:profile-details'))


_NOTICE_BUILDERS: Dict[NoticeKind, Callable[[], str]] = {
    NoticeKind.MAINTENANCE: _maintenance_message,
    NoticeKind.MISSING_EMAIL: _missing_email_message,
    NoticeKind.DATABASE_UPGRADE: _database_upgrade_message,
    NoticeKind.DATABASE_NEWER: _database_newer_message,
    NoticeKind.ACCOUNT_CREATED: _account_created_message,
}


def build_notice(
    kind: NoticeKind,
    level: int = messages.WARNING,
    autoclose: bool = True,
) -> Notice:
    """Build a notice of the given kind with its standard message.

    Args:
        kind (NoticeKind):
            The kind of notice.

        level (int, optional):
            The :py:mod:`django.contrib.messages` level.

        autoclose (bool, optional):
            Whether the page may dismiss the notice automatically.

    Returns:
        Notice:
        The new notice.
    """
    return Notice(kind=kind,
                  message=_NOTICE_BUILDERS[kind](),
                  level=level,
                  autoclose=autoclose)
