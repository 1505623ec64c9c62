"""Fake identity provider: in-memory accounts for development and tests."""

from collections.abc import Callable
from uuid import uuid4

from identity.provider.identity_port import IdentityProviderPort, PrincipalListener
from identity.session.principal import Principal
from shared.errors import AuthenticationFailed, IdentityError


class FakeIdentityProvider(IdentityProviderPort):
    """Identity provider that keeps accounts in memory.

    With `resolve_on_subscribe=False` the initial state is only reported when
    the test calls `resolve()`, which keeps a session in AUTHENTICATING.
    """

    def __init__(self, resolve_on_subscribe: bool = True) -> None:
        self.resolve_on_subscribe = resolve_on_subscribe
        self.accounts: dict[str, dict] = {}
        self.current: Principal | None = None
        self.listeners: list[PrincipalListener] = []
        self.should_succeed: bool = True
        self.failure_reason: str = "Identity provider unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Identity provider unavailable") -> None:
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def register(self, email: str, password: str) -> Principal:
        """Create an account directly. Returns its principal."""
        principal = Principal.of(user_id=f"user-{uuid4().hex[:12]}", email=email)
        self.accounts[email.lower()] = {"password": password, "principal": principal}
        return principal

    def resolve(self, principal: Principal | None = None) -> None:
        """Report `principal` (or None) to every listener, as a restored session would."""
        self.current = principal
        self._emit()

    def on_state_change(self, callback: PrincipalListener) -> Callable[[], None]:
        self.listeners.append(callback)
        if self.resolve_on_subscribe:
            callback(self.current)

        def unsubscribe() -> None:
            if callback in self.listeners:
                self.listeners.remove(callback)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> Principal:
        self._check()
        account = self.accounts.get(email.lower())
        if account is None or account["password"] != password:
            raise AuthenticationFailed("Invalid email or password")

        self.current = account["principal"]
        self._emit()
        return self.current

    async def sign_up(self, email: str, password: str) -> Principal:
        self._check()
        if email.lower() in self.accounts:
            raise AuthenticationFailed("Email already registered")

        self.current = self.register(email, password)
        self._emit()
        return self.current

    async def sign_out(self) -> None:
        self._check()
        self.current = None
        self._emit()

    def _check(self) -> None:
        if not self.should_succeed:
            raise IdentityError(self.failure_reason)

    def _emit(self) -> None:
        for listener in list(self.listeners):
            listener(self.current)
