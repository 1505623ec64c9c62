"""Session state: tri-state view of the current principal.

Identity resolution is asynchronous. Until the provider reports a principal
(or the absence of one) the session is AUTHENTICATING, and guarded views must
neither send the user to the login page nor show authenticated content.

    AUTHENTICATING --provider: principal--> AUTHENTICATED
    AUTHENTICATING --provider: none-------> ANONYMOUS
    ANONYMOUS --login/signup--> AUTHENTICATING --> AUTHENTICATED | ANONYMOUS
    AUTHENTICATED --logout--> ANONYMOUS
"""

from collections.abc import Callable
from enum import Enum

import structlog

from identity.provider.identity_port import IdentityProviderPort
from identity.session.principal import Principal

logger = structlog.get_logger(__name__)

# Where the user lands after signing out
SAFE_DEFAULT_VIEW = "/"


class SessionStatus(Enum):
    ANONYMOUS = "Anonymous"
    AUTHENTICATING = "Authenticating"
    AUTHENTICATED = "Authenticated"


class AccessDecision(Enum):
    """What a view that requires a signed-in user should do."""

    PENDING = "Pending"
    LOGIN_REQUIRED = "Login_Required"
    GRANTED = "Granted"


def resolve_access(status: SessionStatus) -> AccessDecision:
    if status == SessionStatus.AUTHENTICATED:
        return AccessDecision.GRANTED
    if status == SessionStatus.ANONYMOUS:
        return AccessDecision.LOGIN_REQUIRED
    return AccessDecision.PENDING


SessionListener = Callable[[SessionStatus, Principal | None], None]


class SessionState:
    """Tracks whether a principal is signed in, driven by the identity provider.

    Listeners registered with `subscribe` are called with the new status and
    principal after every change.
    """

    def __init__(self, provider: IdentityProviderPort) -> None:
        self._provider = provider
        self._status = SessionStatus.AUTHENTICATING
        self._principal: Principal | None = None
        self._listeners: list[SessionListener] = []
        self._detach: Callable[[], None] | None = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._status == SessionStatus.AUTHENTICATED

    def start(self) -> None:
        """Attach to the identity provider. The session stays AUTHENTICATING until it reports."""
        if self._detach is not None:
            return

        self._set(SessionStatus.AUTHENTICATING, None)
        self._detach = self._provider.on_state_change(self._on_provider_change)

    def close(self) -> None:
        """Detach from the identity provider and drop all listeners."""
        if self._detach is not None:
            self._detach()
            self._detach = None
        self._listeners.clear()

    def subscribe(self, on_change: SessionListener) -> Callable[[], None]:
        """Register a listener and return the function that unregisters it."""
        self._listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in self._listeners:
                self._listeners.remove(on_change)

        return unsubscribe

    async def login(self, email: str, password: str) -> Principal:
        return await self._authenticate(self._provider.sign_in, email, password)

    async def signup(self, email: str, password: str) -> Principal:
        return await self._authenticate(self._provider.sign_up, email, password)

    async def logout(self) -> str:
        """Sign out and return the view the user should be sent to.

        The session is anonymous afterwards even if the provider call fails;
        the failure still propagates.
        """
        try:
            await self._provider.sign_out()
        finally:
            self._set(SessionStatus.ANONYMOUS, None)
            logger.info("Signed out")
        return SAFE_DEFAULT_VIEW

    async def _authenticate(self, provider_call, email: str, password: str) -> Principal:
        previous = (self._status, self._principal)
        self._set(SessionStatus.AUTHENTICATING, None)
        try:
            principal = await provider_call(email, password)
        except Exception:
            # Identity is unchanged on failure
            self._set(*previous)
            logger.warning("Authentication rejected", email=email)
            raise

        self._set(SessionStatus.AUTHENTICATED, principal)
        logger.info("Signed in", user_id=principal.user_id)
        return principal

    def _on_provider_change(self, principal: Principal | None) -> None:
        if principal is None:
            self._set(SessionStatus.ANONYMOUS, None)
        else:
            self._set(SessionStatus.AUTHENTICATED, principal)

    def _set(self, status: SessionStatus, principal: Principal | None) -> None:
        if status == self._status and principal == self._principal:
            return

        self._status = status
        self._principal = principal
        for listener in list(self._listeners):
            listener(status, principal)
