"""Middleware running the request gate for forum views."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.deprecation import MiddlewareMixin

from djforum.gate.gate import TIMEZONE_ACTIVATED_ATTR, RequestGate

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse


#: The URL namespace of forum views.
FORUM_NAMESPACE = 'djforum'


class RequestGateMiddleware(MiddlewareMixin):
    """Runs the request gate before each forum view.

    Only views in the ``djforum`` URL namespace are gated, unless
    ``settings.DJFORUM_GATE_ALL_VIEWS`` is ``True``.

    This must come after Django's ``SessionMiddleware``,
    ``AuthenticationMiddleware`` and ``MessageMiddleware``.
    """

    def __init__(self, *args, **kwargs) -> None:
        if not apps.is_installed('django.contrib.messages'):
            raise ImproperlyConfigured(
                'RequestGateMiddleware requires django.contrib.messages to '
                'be listed in settings.INSTALLED_APPS.')

        super().__init__(*args, **kwargs)

    def process_view(
        self,
        request: HttpRequest,
        view_func,
        view_args,
        view_kwargs,
    ) -> Optional[HttpResponse]:
        """Run the gate before a view.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            view_func (callable):
                The view about to run.

            view_args (tuple):
                Positional arguments for the view.

            view_kwargs (dict):
                Keyword arguments for the view.

        Returns:
            django.http.HttpResponse:
            A redirect from the gate, or ``None`` to run the view.

        Raises:
            djforum.accounts.errors.ForumUserProvisioningError:
                A forum account could not be created for the user.
        """
        if not self.is_gated(request):
            return None

        action_id = request.resolver_match.url_name
        gate = RequestGate.for_request(request)

        return (gate.init(request, action_id) or
                gate.before_action(request, action_id))

    def process_response(
        self,
        request: HttpRequest,
        response: HttpResponse,
    ) -> HttpResponse:
        """Undo the time zone activated by the gate.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

            response (django.http.HttpResponse):
                The HTTP response.

        Returns:
            django.http.HttpResponse:
            The unchanged response.
        """
        if getattr(request, TIMEZONE_ACTIVATED_ATTR, False):
            timezone.deactivate()

        return response

    def is_gated(
        self,
        request: HttpRequest,
    ) -> bool:
        """Return whether a request goes through the gate.

        Args:
            request (django.http.HttpRequest):
                The HTTP request.

        Returns:
            bool:
            ``True`` if the gate runs for the request.
        """
        if getattr(settings, 'DJFORUM_GATE_ALL_VIEWS', False):
            return True

        resolver_match = getattr(request, 'resolver_match', None)

        return (resolver_match is not None and
                FORUM_NAMESPACE in resolver_match.namespaces)
