"""Configurable fake order service for development and testing.

Requests are kept in memory per bearer token. The service can be told to
decline requests or to behave as if the network were down, and it
deduplicates on the idempotency key so a retried submission does not
create a second request.
"""

from datetime import UTC, datetime
from uuid import uuid4

from ordering.request.errors import NetworkError, UnauthorizedError
from ordering.service.port import OrderService, OrderServiceResponse


class FakeOrderService(OrderService):
    """Configurable in-memory order service."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Request could not be accepted"
        self.network_error: bool = False
        self.rejected_tokens: set[str] = set()
        self.calls: list[dict] = []
        self._records: dict[str, list[dict]] = {}
        self._by_idempotency_key: dict[tuple[str, str], OrderServiceResponse] = {}

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Request could not be accepted",
        network_error: bool = False,
    ) -> None:
        """Configure service behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.network_error = network_error

    def revoke(self, token: str) -> None:
        """Make every later call with this token fail as unauthorized."""
        self.rejected_tokens.add(token)

    def _check(self, token: str) -> None:
        if self.network_error:
            raise NetworkError("Order service unreachable")
        if not token or token in self.rejected_tokens:
            raise UnauthorizedError("Session expired, please log in again")

    def create_request(self, payload: dict, token: str) -> OrderServiceResponse:
        self.calls.append({"method": "create_request", "payload": payload, "token": token})
        self._check(token)

        key = payload.get("idempotencyKey")
        if key and (token, key) in self._by_idempotency_key:
            return self._by_idempotency_key[(token, key)]

        if not self.should_succeed:
            return OrderServiceResponse(success=False, error=self.failure_reason)

        request_id = f"req-{uuid4().hex[:8]}"
        self._records.setdefault(token, []).append(
            {
                "requestId": request_id,
                "status": "Pending",
                "items": payload["items"],
                "totalAmount": payload["totalAmount"],
                "deliveryDay": payload["deliveryDay"],
                "createdAt": datetime.now(UTC).isoformat(),
            }
        )
        response = OrderServiceResponse(
            success=True,
            request_id=request_id,
            message="Request submitted successfully",
        )
        if key:
            self._by_idempotency_key[(token, key)] = response
        return response

    def list_requests(self, token: str) -> list[dict]:
        self.calls.append({"method": "list_requests", "token": token})
        self._check(token)
        return list(reversed(self._records.get(token, [])))
