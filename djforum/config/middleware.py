"""Middleware for managing the forum configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils.deprecation import MiddlewareMixin

from djforum.config.forumconfig import ForumConfig

if TYPE_CHECKING:
    from django.http import HttpRequest


class ConfigMiddleware(MiddlewareMixin):
    """Middleware for performing expiration checks on the forum configuration.

    This checks the configuration before each request is handled, ensuring
    the request works with the latest settings saved by any process.
    """

    def process_request(
        self,
        request: HttpRequest,
    ) -> None:
        """Process the HTTP request.

        Args:
            request (django.http.HttpRequest):
                The HTTP request being processed.
        """
        ForumConfig.check_expired()
