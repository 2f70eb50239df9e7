"""Identity provider that talks to a remote OTP service over JSON.

Uses one bounded timeout per call and never retries: an OTP send is not
idempotent from the shopper's point of view (each call texts a new code).
"""

import httpx
import structlog
from pydantic import ValidationError as SchemaError

from identity.api.schemas import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from identity.errors import IdentityProviderError, OtpVerificationError
from identity.provider.port import IdentityProvider, VerifiedIdentity

logger = structlog.get_logger(__name__)


class HttpIdentityProvider(IdentityProvider):
    """OTP provider reached over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None and not base_url:
            raise ValueError("HttpIdentityProvider needs a base_url or a client")
        self.client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def _post(self, path: str, body: dict) -> httpx.Response:
        try:
            return self.client.post(path, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Identity provider unreachable", path=path, error=str(exc))
            raise IdentityProviderError(f"Identity provider unreachable: {exc}") from exc

    def send_challenge(self, phone: str) -> str:
        response = self._post("/auth/otp/send", SendOtpRequest(phone=phone).model_dump(by_alias=True))
        if response.status_code >= 400:
            raise IdentityProviderError(f"Could not send OTP (HTTP {response.status_code})")
        try:
            return SendOtpResponse.model_validate(response.json()).handle
        except (ValueError, SchemaError) as exc:
            raise IdentityProviderError(f"Malformed OTP response: {exc}") from exc

    def verify(self, handle: str, code: str) -> VerifiedIdentity:
        response = self._post(
            "/auth/otp/verify",
            VerifyOtpRequest(handle=handle, code=code).model_dump(by_alias=True),
        )
        if response.status_code in (400, 401, 403):
            raise OtpVerificationError("Incorrect or expired OTP")
        if response.status_code >= 400:
            raise IdentityProviderError(f"Could not verify OTP (HTTP {response.status_code})")
        try:
            body = VerifyOtpResponse.model_validate(response.json())
        except (ValueError, SchemaError) as exc:
            raise IdentityProviderError(f"Malformed verification response: {exc}") from exc
        return VerifiedIdentity(user_id=body.user_id, token=body.token, phone=body.phone)
