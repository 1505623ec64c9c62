"""EmailAddress value object and the structural check behind it."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def check_email_address(email: str) -> str:
    """Return `email` unchanged, or raise ValueError when it is malformed.

    Enforces exactly one @, non-empty local and domain parts, a dotted domain,
    no leading/trailing dots or hyphens, no consecutive dots and no forbidden
    characters. Bracketed IP-literal domains are accepted.
    """
    if " " in email or "\t" in email or "\n" in email:
        raise ValueError(f"Invalid email address: {email!r}")

    if email.count("@") != 1:
        raise ValueError(f"Invalid email address: {email!r}")

    local_part, domain_part = email.split("@", 1)
    ip_literal = domain_part.startswith("[") and domain_part.endswith("]")

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise ValueError(f"Invalid email address: {email!r}")

    if not ip_literal:
        if "." not in domain_part:
            raise ValueError(f"Invalid email address: {email!r}")
        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise ValueError(f"Invalid email address: {email!r}")

    if ".." in local_part or ".." in domain_part:
        raise ValueError(f"Invalid email address: {email!r}")

    for forbidden in _FORBIDDEN:
        if forbidden in email and not (forbidden in "[]" and ip_literal):
            raise ValueError(f"Invalid email address: {email!r}")

    return email


@identity.value_object
class EmailAddress:
    """A validated email address, used wherever a principal's email is stored."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        if not self.address:
            return
        try:
            check_email_address(self.address)
        except ValueError:
            raise ValidationError({"address": ["Invalid email address"]}) from None
