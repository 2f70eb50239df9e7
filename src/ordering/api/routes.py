"""FastAPI routes for weekly requests, backed by the app's order service."""

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from ordering.api.schemas import CreateRequestPayload, CreateRequestResponse, RequestListResponse
from ordering.request.errors import NetworkError, UnauthorizedError

router = APIRouter(prefix="/requests", tags=["requests"])


def _bearer_token(request: Request, authorization: str | None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    token = authorization.removeprefix("Bearer ").strip()
    if request.app.state.identity_provider.user_for_token(token) is None:
        raise HTTPException(status_code=401, detail="Unknown or expired token")
    return token


@router.post("", status_code=201, response_model=CreateRequestResponse)
async def create_request(
    request: Request,
    body: CreateRequestPayload,
    authorization: str | None = Header(default=None),
    idempotency_key: str | None = Header(default=None),
):
    token = _bearer_token(request, authorization)
    payload = body.model_dump(by_alias=True)
    if idempotency_key and not payload.get("idempotencyKey"):
        payload["idempotencyKey"] = idempotency_key

    try:
        result = request.app.state.order_service.create_request(payload, token)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except NetworkError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    response = CreateRequestResponse(
        success=result.success,
        request_id=result.request_id,
        message=result.message,
        error=result.error,
    )
    if not result.success:
        return JSONResponse(status_code=422, content=response.model_dump(by_alias=True))
    return response


@router.get("", response_model=RequestListResponse)
async def list_requests(request: Request, authorization: str | None = Header(default=None)):
    token = _bearer_token(request, authorization)
    try:
        records = request.app.state.order_service.list_requests(token)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except NetworkError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return RequestListResponse.model_validate({"requests": records})
