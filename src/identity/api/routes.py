"""FastAPI endpoints for phone-OTP login, backed by the app's identity provider."""

from fastapi import APIRouter, HTTPException, Request

from identity.api.schemas import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from identity.errors import IdentityProviderError, OtpVerificationError

router = APIRouter(prefix="/auth/otp", tags=["auth"])


@router.post("/send", response_model=SendOtpResponse)
async def send_otp(request: Request, body: SendOtpRequest) -> SendOtpResponse:
    provider = request.app.state.identity_provider
    try:
        handle = provider.send_challenge(body.phone)
    except IdentityProviderError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return SendOtpResponse(handle=handle)


@router.post("/verify", response_model=VerifyOtpResponse)
async def verify_otp(request: Request, body: VerifyOtpRequest) -> VerifyOtpResponse:
    provider = request.app.state.identity_provider
    try:
        identity = provider.verify(body.handle, body.code)
    except OtpVerificationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except IdentityProviderError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return VerifyOtpResponse(user_id=identity.user_id, token=identity.token, phone=identity.phone)
