"""Identity provider port: abstract interface for sign-in and session changes."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from identity.session.principal import Principal

PrincipalListener = Callable[[Principal | None], None]


class IdentityProviderPort(ABC):
    """Abstract interface for an external identity provider.

    Sign-in failures raise AuthenticationFailed; an unreachable provider
    raises IdentityError.
    """

    @abstractmethod
    def on_state_change(self, callback: PrincipalListener) -> Callable[[], None]:
        """Call `callback` with the current principal, or None, whenever the session changes.

        The current state is reported once after subscribing. Returns the
        function that cancels the subscription.
        """
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Principal:
        ...

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Principal:
        ...

    @abstractmethod
    async def sign_out(self) -> None:
        ...
