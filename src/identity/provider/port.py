"""Identity provider port (abstract interface).

Phone login is a two step challenge/response: the provider sends an OTP to
the phone and hands back an opaque handle; the shopper then proves
possession of the code. Adapters: FakeIdentityProvider for development and
tests, HttpIdentityProvider for a remote OTP service.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VerifiedIdentity:
    """Result of a successful OTP verification."""

    user_id: str
    token: str
    phone: str


class IdentityProvider(ABC):
    """Abstract OTP identity provider interface."""

    @abstractmethod
    def send_challenge(self, phone: str) -> str:
        """Send an OTP to ``phone`` and return the confirmation handle.

        Raises:
            IdentityProviderError: the provider could not send the code.
        """
        ...

    @abstractmethod
    def verify(self, handle: str, code: str) -> VerifiedIdentity:
        """Check ``code`` against the challenge identified by ``handle``.

        Raises:
            OtpVerificationError: the code or handle is not valid.
            IdentityProviderError: the provider could not be reached.
        """
        ...
