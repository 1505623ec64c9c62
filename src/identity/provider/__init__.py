"""Identity provider adapters."""

from identity.provider.fake_identity import FakeIdentityProvider
from identity.provider.identity_port import IdentityProviderPort

__all__ = ["FakeIdentityProvider", "IdentityProviderPort"]
