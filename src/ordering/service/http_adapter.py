"""Order service adapter that submits weekly requests to a remote JSON API.

One bounded timeout per call and no automatic retries. Every transport
failure and every unexpected status surfaces as NetworkError so the
submission flow can leave the cart untouched.
"""

import httpx
import structlog
from pydantic import ValidationError as SchemaError

from ordering.api.schemas import CreateRequestResponse, RequestListResponse
from ordering.request.errors import NetworkError, UnauthorizedError
from ordering.service.port import OrderService, OrderServiceResponse

logger = structlog.get_logger(__name__)


class HttpOrderService(OrderService):
    """Order service reached over HTTP with a bearer token."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None and not base_url:
            raise ValueError("HttpOrderService needs a base_url or a client")
        self.client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    def _send(self, method: str, path: str, token: str, **kwargs) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}", **kwargs.pop("headers", {})}
        try:
            response = self.client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Order service timed out", path=path)
            raise NetworkError("Order service timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Order service unreachable", path=path, error=str(exc))
            raise NetworkError(f"Order service unreachable: {exc}") from exc

        if response.status_code == 401:
            raise UnauthorizedError("Session expired, please log in again")
        return response

    def create_request(self, payload: dict, token: str) -> OrderServiceResponse:
        headers = {}
        if payload.get("idempotencyKey"):
            headers["Idempotency-Key"] = payload["idempotencyKey"]

        response = self._send("POST", "/requests", token, json=payload, headers=headers)
        # 422 carries a declined request in the regular response body
        if response.status_code >= 400 and response.status_code != 422:
            logger.warning("Order service error", status_code=response.status_code)
            raise NetworkError(f"Order service returned HTTP {response.status_code}")

        try:
            body = CreateRequestResponse.model_validate(response.json())
        except (ValueError, SchemaError) as exc:
            raise NetworkError(f"Malformed order service response: {exc}") from exc

        if body.success and not body.request_id:
            raise NetworkError("Order service accepted the request without an id")
        return OrderServiceResponse(
            success=body.success,
            request_id=body.request_id,
            message=body.message,
            error=body.error,
        )

    def list_requests(self, token: str) -> list[dict]:
        response = self._send("GET", "/requests", token)
        if response.status_code >= 400:
            raise NetworkError(f"Order service returned HTTP {response.status_code}")
        try:
            body = RequestListResponse.model_validate(response.json())
        except (ValueError, SchemaError) as exc:
            raise NetworkError(f"Malformed order service response: {exc}") from exc
        return [record.model_dump(by_alias=True, mode="json") for record in body.requests]
