"""Middleware used for logging."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.core.exceptions import PermissionDenied, SuspiciousOperation
from django.http import Http404
from django.utils.deprecation import MiddlewareMixin

from djforum.log import init_logging

if TYPE_CHECKING:
    from django.http import HttpRequest


logger = logging.getLogger(__name__)


class LoggingMiddleware(MiddlewareMixin):
    """Sets up logging and logs exceptions raised by views."""

    #: Exceptions that should be ignored by this logger.
    #:
    #: Each of these are handled by Django itself on the HTTP layer.
    ignored_exceptions = (Http404, PermissionDenied, SuspiciousOperation)

    def process_request(
        self,
        request: HttpRequest,
    ) -> None:
        """Set up logging on the first request.

        Args:
            request (django.http.HttpRequest):
                The HTTP request being processed.
        """
        init_logging()

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> None:
        """Log an exception raised on a page.

        Exceptions normally handled by Django's HTTP layer are ignored.

        Args:
            request (django.http.HttpRequest):
                The HTTP request for the page.

            exception (Exception):
                The exception that was raised.
        """
        if not isinstance(exception, self.ignored_exceptions):
            logger.exception('Exception thrown for user %s at %s\n\n%s',
                             getattr(request, 'user', None),
                             request.build_absolute_uri(),
                             exception,
                             extra={'request': request})
