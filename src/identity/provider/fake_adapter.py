"""Configurable fake identity provider for development and testing.

No SMS is sent: every challenge accepts the same configured code. Issued
tokens are remembered so the mock API can resolve a bearer token back to
its user.
"""

from uuid import NAMESPACE_URL, uuid4, uuid5

from identity.errors import IdentityProviderError, OtpVerificationError
from identity.provider.port import IdentityProvider, VerifiedIdentity
from identity.shared.phone import normalize_phone


class FakeIdentityProvider(IdentityProvider):
    """Fake OTP provider with a fixed code."""

    def __init__(self, code: str = "123456") -> None:
        self.code = code
        self.available: bool = True
        self.calls: list[dict] = []
        self._challenges: dict[str, str] = {}
        self._tokens: dict[str, str] = {}

    def configure(self, code: str | None = None, available: bool = True) -> None:
        """Configure provider behavior at runtime."""
        if code is not None:
            self.code = code
        self.available = available

    @staticmethod
    def user_id_for(phone: str) -> str:
        """Stable user id for a phone number, so repeat logins map to one user."""
        return f"user-{uuid5(NAMESPACE_URL, 'tel:' + normalize_phone(phone)).hex[:12]}"

    def send_challenge(self, phone: str) -> str:
        self.calls.append({"method": "send_challenge", "phone": phone})
        if not self.available:
            raise IdentityProviderError("OTP service unavailable")

        handle = f"fake_otp_{uuid4().hex[:12]}"
        self._challenges[handle] = normalize_phone(phone)
        return handle

    def verify(self, handle: str, code: str) -> VerifiedIdentity:
        self.calls.append({"method": "verify", "handle": handle, "code": code})
        if not self.available:
            raise IdentityProviderError("OTP service unavailable")

        phone = self._challenges.get(handle)
        if phone is None:
            raise OtpVerificationError("Unknown or expired OTP challenge")
        if code != self.code:
            raise OtpVerificationError("Incorrect OTP")

        del self._challenges[handle]
        user_id = self.user_id_for(phone)
        token = f"mock-token-{uuid4().hex[:9]}"
        self._tokens[token] = user_id
        return VerifiedIdentity(user_id=user_id, token=token, phone=phone)

    def user_for_token(self, token: str | None) -> str | None:
        """Return the user id a token was issued to, or None."""
        if not token:
            return None
        return self._tokens.get(token)
