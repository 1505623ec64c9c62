"""Supabase Auth adapter for the identity provider.

The supabase client is synchronous and reports auth changes from whatever
thread made the call, so notifications are handed back to the event loop
that subscribed.
"""

import asyncio
from collections.abc import Callable

import structlog
from supabase import AuthApiError, Client

from identity.domain import identity
from identity.provider.identity_port import IdentityProviderPort, PrincipalListener
from identity.session.principal import Principal
from shared.errors import AuthenticationFailed, IdentityError

logger = structlog.get_logger(__name__)


def _principal_from(user) -> Principal | None:
    if user is None:
        return None
    # Auth callbacks arrive outside any request
    with identity.domain_context():
        return Principal.of(user_id=user.id, email=user.email)


class SupabaseIdentityProvider(IdentityProviderPort):
    """Identity provider backed by Supabase Auth (email + password)."""

    def __init__(self, client: Client) -> None:
        self._client = client
        self._pending: set[asyncio.Task] = set()

    def on_state_change(self, callback: PrincipalListener) -> Callable[[], None]:
        loop = asyncio.get_running_loop()

        def _listener(event, session) -> None:
            principal = _principal_from(session.user if session else None)
            loop.call_soon_threadsafe(callback, principal)

        subscription = self._client.auth.on_auth_state_change(_listener)

        task = loop.create_task(self._report_current(callback))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        return subscription.unsubscribe

    async def _report_current(self, callback: PrincipalListener) -> None:
        try:
            session = await asyncio.to_thread(self._client.auth.get_session)
        except Exception as exc:
            logger.warning("Could not restore the previous session", error=str(exc))
            session = None
        callback(_principal_from(session.user if session else None))

    async def sign_in(self, email: str, password: str) -> Principal:
        credentials = {"email": email, "password": password}
        try:
            response = await asyncio.to_thread(self._client.auth.sign_in_with_password, credentials)
        except AuthApiError as exc:
            raise AuthenticationFailed(str(exc), cause=exc) from exc
        except Exception as exc:
            raise IdentityError("Sign-in request failed", cause=exc) from exc

        principal = _principal_from(response.user)
        if principal is None:
            raise AuthenticationFailed("Invalid email or password")
        return principal

    async def sign_up(self, email: str, password: str) -> Principal:
        credentials = {"email": email, "password": password}
        try:
            response = await asyncio.to_thread(self._client.auth.sign_up, credentials)
        except AuthApiError as exc:
            raise AuthenticationFailed(str(exc), cause=exc) from exc
        except Exception as exc:
            raise IdentityError("Sign-up request failed", cause=exc) from exc

        principal = _principal_from(response.user)
        if principal is None:
            raise AuthenticationFailed("Sign-up was not accepted")
        return principal

    async def sign_out(self) -> None:
        try:
            await asyncio.to_thread(self._client.auth.sign_out)
        except Exception as exc:
            raise IdentityError("Sign-out request failed", cause=exc) from exc
