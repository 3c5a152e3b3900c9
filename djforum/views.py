"""Views for the forum pages the request gate sends users to."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect, render

from djforum import get_schema_version
from djforum.accounts.capabilities import (CAPABILITY_ADMIN,
                                           get_capability_checker)
from djforum.accounts.resolvers import ForumUserStore
from djforum.config.forumconfig import ForumConfig
from djforum.util.versions import compare_versions

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse


def _check_admin(request: HttpRequest) -> None:
    """Raise PermissionDenied unless the user is a forum administrator.

    Args:
        request (django.http.HttpRequest):
            The HTTP request.

    Raises:
        django.core.exceptions.PermissionDenied:
            The user is not an administrator.
    """
    if not get_capability_checker().has(request.user, CAPABILITY_ADMIN):
        raise PermissionDenied


def index(request: HttpRequest) -> HttpResponse:
    """Render the forum's main page."""
    return render(request, 'djforum/index.html', {
        'forum_name': ForumConfig.get_instance().get('name'),
    })


def maintenance(request: HttpRequest) -> HttpResponse:
    """Render the maintenance page.

    Outside of maintenance mode, this sends the user to the main page.
    """
    config = ForumConfig.get_instance()

    if not config.is_maintenance_mode():
        return redirect('djforum:index')

    return render(request, 'djforum/maintenance.html', {
        'forum_name': config.get('name'),
    })


def ban(request: HttpRequest) -> HttpResponse:
    """Render the page shown to banned users."""
    return render(request, 'djforum/ban.html')


@login_required
def profile_details(request: HttpRequest) -> HttpResponse:
    """Render the user's forum account details."""
    return render(request, 'djforum/profile_details.html', {
        'forum_user': ForumUserStore().find_current(request),
    })


def settings(request: HttpRequest) -> HttpResponse:
    """Render the forum settings for administrators."""
    _check_admin(request)

    return render(request, 'djforum/settings.html', {
        'forum_settings': sorted(ForumConfig.get_instance().get_all().items()),
    })


def level_up(request: HttpRequest) -> HttpResponse:
    """Render the database upgrade status for administrators."""
    _check_admin(request)

    module_version = get_schema_version()
    db_version = ForumConfig.get_instance().get('version')

    return render(request, 'djforum/level_up.html', {
        'db_version': db_version,
        'module_version': module_version,
        'upgrade_needed': compare_versions(module_version, db_version) > 0,
    })
