"""Principal value object: the identity the provider resolved a session to."""

from protean.fields import Identifier, ValueObject

from identity.domain import identity
from identity.shared.email import EmailAddress


@identity.value_object
class Principal:
    """A signed-in user as reported by the identity provider.

    The storefront only holds a reference to the provider's user; it never
    owns or modifies it.
    """

    user_id: Identifier(required=True)
    email: ValueObject(EmailAddress)

    @classmethod
    def of(cls, user_id, email: str | None = None) -> "Principal":
        return cls(
            user_id=str(user_id),
            email=EmailAddress(address=email) if email else None,
        )

    @property
    def email_address(self) -> str | None:
        return self.email.address if self.email else None
