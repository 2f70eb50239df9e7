"""Identity provider factory.

Provides create_identity_provider() to build an implementation by name:
- "fake": FakeIdentityProvider for development and testing
- "http": HttpIdentityProvider against a remote OTP service
"""

from identity.provider.fake_adapter import FakeIdentityProvider
from identity.provider.http_adapter import HttpIdentityProvider
from identity.provider.port import IdentityProvider, VerifiedIdentity

__all__ = ["FakeIdentityProvider", "HttpIdentityProvider", "IdentityProvider", "VerifiedIdentity", "create_identity_provider"]


def create_identity_provider(kind: str = "fake", base_url: str | None = None, timeout: float = 10.0) -> IdentityProvider:
    """Return a new identity provider of the given kind."""
    if kind == "fake":
        return FakeIdentityProvider()
    if kind == "http":
        return HttpIdentityProvider(base_url=base_url, timeout=timeout)
    raise ValueError(f"Unknown identity provider: {kind}")
